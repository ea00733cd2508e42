import logging

import numpy as np
import taichi as ti

logger = logging.getLogger(__name__)


def numpy_type(dtype):
    if dtype == ti.u8:
        return np.uint8
    if dtype == ti.f16:
        return np.float16
    return np.float32


'''
class grid_buffer: one physical 2D buffer backed by a taichi ndarray
params:
    resolution: (width, height) in cells
    channels: components per cell (1 gives a scalar array, otherwise a vector array)
    dtype: taichi data type of the components
Kernels take the array as ti.types.ndarray(), so they compile once per dtype
and channel count whatever the resolution. The storage is freed when the last
reference to the buffer goes away.
'''


class grid_buffer:
    def __init__(self, resolution, channels, dtype=ti.f32):
        width, height = int(resolution[0]), int(resolution[1])
        if width < 1 or height < 1:
            raise ValueError("Invalid grid resolution {}x{}".format(
                width, height))
        if channels < 1:
            raise ValueError("Invalid channel count {}".format(channels))

        self.resolution = (width, height)
        self.channels = channels
        self.dtype = dtype

        if channels == 1:
            self.array = ti.ndarray(dtype=dtype, shape=self.resolution)
        else:
            self.array = ti.Vector.ndarray(channels, dtype, self.resolution)
        self.fill(0)

    @property
    def width(self):
        return self.resolution[0]

    @property
    def height(self):
        return self.resolution[1]

    @property
    def shape(self):
        if self.channels == 1:
            return self.resolution
        return self.resolution + (self.channels, )

    def fill(self, value):
        self.from_numpy(np.full(self.shape, value))

    def to_numpy(self):
        return self.array.to_numpy()

    def from_numpy(self, arr):
        self.array.from_numpy(
            np.ascontiguousarray(arr, dtype=numpy_type(self.dtype)))


'''
class multi_buffer: n physical buffers of one field, written round-robin
params:
    name: field name, used for logging
    resolution: (width, height) in cells
    channels: components per cell
    n_buffers: number of physical buffers (2 for fields read and written in the same frame)
    dtype: taichi data type of the components
'''


class multi_buffer:
    def __init__(self, name, resolution, channels, n_buffers, dtype=ti.f32):
        if n_buffers < 1:
            raise ValueError(
                "Field {} needs at least one buffer, got {}".format(
                    name, n_buffers))

        self.name = name
        self.channels = channels
        self.dtype = dtype
        self.resolution = (int(resolution[0]), int(resolution[1]))
        self.index = 0

        self.buffers = [
            grid_buffer(self.resolution, channels, dtype)
            for _ in range(n_buffers)
        ]
        self.needs_resize = [False] * n_buffers

        self._current = None
        self._blank = None
        self._retired = []

        logger.debug("Allocated field %s: %d x %s buffers", name, n_buffers,
                     self.resolution)

    @property
    def n_buffers(self):
        return len(self.buffers)

    @property
    def pending_resize(self):
        return any(self.needs_resize)

    def acquire_for_write(self):
        slot = self.index
        self.index = (self.index + 1) % self.n_buffers

        if self.needs_resize[slot]:
            # kept alive until the next collect(), readers holding the old
            # buffer keep their stale but valid copy after that
            self._retired.append(self.buffers[slot])
            self.buffers[slot] = grid_buffer(self.resolution, self.channels,
                                             self.dtype)
            self.needs_resize[slot] = False
            logger.debug("Reallocated field %s buffer %d at %s", self.name,
                         slot, self.resolution)

        target = self.buffers[slot]
        assert self.n_buffers == 1 or target is not self._current
        self._current = target
        return target

    def read(self):
        if self._current is not None:
            return self._current

        if self._blank is None or self._blank.resolution != self.resolution:
            if self._blank is not None:
                self._retired.append(self._blank)
            self._blank = grid_buffer(self.resolution, self.channels,
                                      self.dtype)
        return self._blank

    def resize(self, resolution):
        resolution = (int(resolution[0]), int(resolution[1]))
        if resolution[0] < 1 or resolution[1] < 1:
            raise ValueError("Invalid grid resolution {}x{}".format(
                resolution[0], resolution[1]))

        self.resolution = resolution
        self.needs_resize = [True] * self.n_buffers
        self._current = None
        logger.debug("Field %s resize to %s requested", self.name, resolution)

    def clear(self):
        for slot, buffer in enumerate(self.buffers):
            if not self.needs_resize[slot]:
                buffer.fill(0)
        self._current = None

    def collect(self):
        if self._retired:
            logger.debug("Dropped %d retired buffers of field %s",
                         len(self._retired), self.name)
        self._retired = []
