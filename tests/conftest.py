import numpy as np
import pytest
import taichi as ti

from stablefluid.grid import grid_buffer


@pytest.fixture(scope="session", autouse=True)
def taichi_cpu():
    ti.init(arch=ti.cpu, default_fp=ti.f32)
    yield
    ti.reset()


@pytest.fixture
def make_grid():
    def make(values):
        values = np.asarray(values, dtype=np.float32)
        channels = 1 if values.ndim == 2 else values.shape[2]
        grid = grid_buffer(values.shape[:2], channels)
        grid.from_numpy(values)
        return grid

    return make


def gaussian_jet(res_x, res_y, center=(0.5, 0.5), sigma=0.1):
    x = (np.arange(res_x) + 0.5) / res_x
    y = (np.arange(res_y) + 0.5) / res_y
    xx, yy = np.meshgrid(x, y, indexing='ij')
    w = np.exp(-((xx - center[0])**2 + (yy - center[1])**2) / sigma**2)
    vel = np.zeros((res_x, res_y, 2), dtype=np.float32)
    vel[:, :, 0] = w
    return vel
