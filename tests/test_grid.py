import numpy as np
import pytest

from stablefluid.grid import grid_buffer, multi_buffer


def test_grid_buffer_starts_zeroed():
    grid = grid_buffer((5, 3), 2)
    arr = grid.to_numpy()
    assert arr.shape == (5, 3, 2)
    assert np.all(arr == 0)


def test_scalar_grid_shape():
    grid = grid_buffer((4, 7), 1)
    assert grid.to_numpy().shape == (4, 7)
    assert grid.width == 4 and grid.height == 7


@pytest.mark.parametrize("resolution, channels", [((0, 4), 1), ((4, 4), 0)])
def test_grid_buffer_rejects_invalid_shape(resolution, channels):
    with pytest.raises(ValueError):
        grid_buffer(resolution, channels)


def test_store_needs_a_buffer():
    with pytest.raises(ValueError):
        multi_buffer('empty', (4, 4), 1, 0)


@pytest.mark.parametrize("n_buffers", [1, 2, 3])
def test_rotation_visits_every_buffer_once(n_buffers):
    store = multi_buffer('field', (4, 4), 1, n_buffers)
    handles = [store.acquire_for_write() for _ in range(n_buffers)]

    assert len({id(h) for h in handles}) == n_buffers
    assert {id(h) for h in handles} == {id(b) for b in store.buffers}
    assert store.acquire_for_write() is handles[0]


def test_write_handle_is_never_the_read_handle():
    store = multi_buffer('velocity', (4, 4), 2, 2)
    for _ in range(6):
        reading = store.read()
        writing = store.acquire_for_write()
        assert writing is not reading
        assert store.read() is writing


def test_read_before_write_is_zero():
    store = multi_buffer('pressure', (6, 4), 1, 2)
    arr = store.read().to_numpy()
    assert arr.shape == (6, 4)
    assert np.all(arr == 0)


def test_resize_is_deferred_until_write():
    store = multi_buffer('dye', (4, 4), 3, 2)
    store.acquire_for_write().fill(1.0)
    old = list(store.buffers)

    store.resize((8, 6))
    assert store.resolution == (8, 6)
    assert store.pending_resize
    assert store.buffers == old
    assert all(b.resolution == (4, 4) for b in store.buffers)

    # no partially resized or stale buffer is exposed for reading
    blank = store.read()
    assert blank.resolution == (8, 6)
    assert np.all(blank.to_numpy() == 0)

    fresh = store.acquire_for_write()
    assert fresh.resolution == (8, 6)
    assert np.all(fresh.to_numpy() == 0)
    assert store.pending_resize

    store.acquire_for_write()
    assert not store.pending_resize
    assert all(b.resolution == (8, 6) for b in store.buffers)


def test_collect_drops_retired_buffers_but_held_handles_stay_valid():
    store = multi_buffer('velocity', (4, 4), 2, 2)
    held = store.acquire_for_write()
    held.fill(3.0)

    store.resize((5, 5))
    store.acquire_for_write()
    store.acquire_for_write()
    assert held in store._retired

    store.collect()
    assert store._retired == []
    arr = held.to_numpy()
    assert arr.shape == (4, 4, 2)
    assert np.all(arr == 3.0)


def test_vector_fill_sets_every_channel():
    grid = grid_buffer((3, 2), 3)
    grid.fill(0.25)
    assert grid.shape == (3, 2, 3)
    assert np.all(grid.to_numpy() == np.float32(0.25))


def test_clear_zeroes_buffers():
    store = multi_buffer('velocity', (3, 3), 2, 2)
    store.acquire_for_write().fill(2.0)
    store.clear()

    assert np.all(store.read().to_numpy() == 0)
    for b in store.buffers:
        assert np.all(b.to_numpy() == 0)
