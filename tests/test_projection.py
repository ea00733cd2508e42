import numpy as np

from stablefluid.grid import grid_buffer, multi_buffer
from stablefluid.passes import (divergence_pass, gradient_subtraction_pass,
                                jacobi_pass)

from conftest import gaussian_jet


def neighbours(a):
    p = np.pad(a, 1, mode='edge')
    # left, right, bottom, top
    return p[:-2, 1:-1], p[2:, 1:-1], p[1:-1, :-2], p[1:-1, 2:]


def divergence_reference(vel):
    l, r, _, _ = neighbours(vel[:, :, 0])
    _, _, b, t = neighbours(vel[:, :, 1])
    return 0.5 * ((r - l) + (t - b))


def compute_divergence(velocity):
    out = grid_buffer(velocity.resolution, 1)
    divergence_pass().apply(velocity, out)
    return out.to_numpy()


def test_divergence_matches_central_differences(make_grid):
    rng = np.random.default_rng(3)
    vel = rng.normal(size=(9, 7, 2)).astype(np.float32)

    res = compute_divergence(make_grid(vel))

    np.testing.assert_allclose(res, divergence_reference(vel), rtol=1e-5,
                               atol=1e-6)


def test_jacobi_step_matches_reference(make_grid):
    rng = np.random.default_rng(4)
    p = rng.normal(size=(10, 8)).astype(np.float32)
    div = rng.normal(size=(10, 8)).astype(np.float32)
    out = grid_buffer((10, 8), 1)

    jacobi_pass().iterate(make_grid(p), make_grid(div), out)

    l, r, b, t = neighbours(p)
    expected = (l + r + b + t - div) * 0.25
    np.testing.assert_allclose(out.to_numpy(), expected, rtol=1e-5,
                               atol=1e-6)


def test_solve_ping_pongs_and_warm_starts(make_grid):
    div = make_grid(np.ones((6, 6)))
    pressure = multi_buffer('pressure', (6, 6), 1, 2)
    solver = jacobi_pass()

    first = solver.solve(pressure, div, 5)
    assert first is pressure.buffers[0]
    assert pressure.index == 1

    before = first.to_numpy().copy()
    second = solver.solve(pressure, div, 1)
    assert second is pressure.buffers[1]

    # one more step continues from the previous iterate instead of zero
    l, r, b, t = neighbours(before)
    expected = (l + r + b + t - 1.0) * 0.25
    np.testing.assert_allclose(second.to_numpy(), expected, rtol=1e-5)


def test_gradient_subtraction_matches_reference(make_grid):
    rng = np.random.default_rng(5)
    vel = rng.normal(size=(7, 9, 2)).astype(np.float32)
    p = rng.normal(size=(7, 9)).astype(np.float32)
    out = grid_buffer((7, 9), 2)

    gradient_subtraction_pass().apply(make_grid(vel), make_grid(p), out)

    l, r, b, t = neighbours(p)
    expected = vel.copy()
    expected[:, :, 0] -= 0.5 * (r - l)
    expected[:, :, 1] -= 0.5 * (t - b)
    np.testing.assert_allclose(out.to_numpy(), expected, rtol=1e-5,
                               atol=1e-6)


def test_projection_reduces_divergence(make_grid):
    velocity = make_grid(gaussian_jet(64, 64))
    before = compute_divergence(velocity)

    div = make_grid(before)
    pressure = multi_buffer('pressure', (64, 64), 1, 2)
    p = jacobi_pass().solve(pressure, div, 32)

    projected = grid_buffer((64, 64), 2)
    gradient_subtraction_pass().apply(velocity, p, projected)
    after = compute_divergence(projected)

    assert np.linalg.norm(after) < np.linalg.norm(before)
    assert np.abs(after).sum() < np.abs(before).sum()
