import logging

from stablefluid.config import solver_config
from stablefluid.grid import multi_buffer
from stablefluid.passes import (advection_pass, boundary_pass, divergence_pass,
                                gradient_subtraction_pass, jacobi_pass,
                                touch_color_pass, touch_force_pass)

logger = logging.getLogger(__name__)


def grid_resolution(scale, display_size):
    return (max(2, int(round(scale * display_size[0]))),
            max(2, int(round(scale * display_size[1]))))


'''
class simulation: the frame loop of the stable fluids solver
params:
    config: solver_config, read once at the start of every frame
    display_size: (width, height) of the display, the grid is scale * display_size
The driver exclusively owns the field buffers. Readouts are valid until the
next call to step().
'''


class simulation:
    VISUALIZATIONS = ('color', 'velocity', 'divergence', 'pressure')

    def __init__(self, config=None, display_size=(512, 512)):
        self.config = config if config is not None else solver_config()
        self.display_size = (int(display_size[0]), int(display_size[1]))
        self.resolution = grid_resolution(self.config.scale,
                                          self.display_size)
        self.frame = 0

        # fields, read and written within one frame need two buffers
        self.velocity = multi_buffer('velocity', self.resolution, 2, 2)
        self.divergence = multi_buffer('divergence', self.resolution, 1, 1)
        self.pressure = multi_buffer('pressure', self.resolution, 1, 2)
        self.dye = multi_buffer('dye', self.resolution, 3, 2)

        # passes
        self.velocity_advection = advection_pass()
        self.color_advection = advection_pass()
        self.touch_force = touch_force_pass()
        self.touch_color = touch_color_pass()
        self.velocity_boundary = boundary_pass()
        self.velocity_divergence = divergence_pass()
        self.pressure_solver = jacobi_pass()
        self.pressure_subtraction = gradient_subtraction_pass()

        self._unwatch = self.config.watch(self._on_scale, 'scale')

        logger.info("Simulation grid %dx%d for display %dx%d",
                    self.resolution[0], self.resolution[1],
                    self.display_size[0], self.display_size[1])

    def fields(self):
        return (self.velocity, self.divergence, self.pressure, self.dye)

    def step(self, sites=()):
        sites = list(sites)
        for store in self.fields():
            store.collect()

        params = self.config.snapshot()
        if not params.simulate:
            return self.frame

        dt = params.timestep

        # advect the velocity vector field
        v = self.velocity.read()
        out = self.velocity.acquire_for_write()
        self.velocity_advection.apply(v, v, out, dt, decay=0.0)
        v = out

        # add external forces and colors
        if len(sites) > 0:
            out = self.velocity.acquire_for_write()
            self.touch_force.apply(v, sites, out, params.force_strength)
            v = out

            c = self.dye.read()
            out = self.dye.acquire_for_write()
            self.touch_color.apply(c, sites, out)

        # simulation walls
        if params.boundaries:
            out = self.velocity.acquire_for_write()
            self.velocity_boundary.apply(v, out)
            v = out

        d = self.divergence.acquire_for_write()
        self.velocity_divergence.apply(v, d)

        p = self.pressure_solver.solve(self.pressure, d, params.iterations)

        # make the velocity field divergence free
        out = self.velocity.acquire_for_write()
        self.pressure_subtraction.apply(v, p, out)
        v = out

        c = self.dye.read()
        out = self.dye.acquire_for_write()
        self.color_advection.apply(v, c, out, dt, decay=params.color_decay)

        self.frame += 1
        return self.frame

    def on_resize(self, display_size):
        self.display_size = (int(display_size[0]), int(display_size[1]))
        self.resolution = grid_resolution(self.config.scale,
                                          self.display_size)
        for store in self.fields():
            store.resize(self.resolution)

        logger.info("Simulation grid resized to %dx%d", self.resolution[0],
                    self.resolution[1])

    def _on_scale(self, scale):
        self.on_resize(self.display_size)

    def reset(self):
        for store in self.fields():
            store.clear()
        logger.info("Simulation reset at frame %d", self.frame)

    def reset_pressure(self):
        self.pressure.clear()

    def current_velocity(self):
        return self.velocity.read()

    def current_dye(self):
        return self.dye.read()

    def current_divergence(self):
        return self.divergence.read()

    def current_pressure(self):
        return self.pressure.read()

    def current(self, name):
        name = name.lower()
        if name in ('color', 'dye'):
            return self.current_dye()
        if name == 'velocity':
            return self.current_velocity()
        if name == 'divergence':
            return self.current_divergence()
        if name == 'pressure':
            return self.current_pressure()
        raise ValueError("Visualization {} not supported".format(name))

    def close(self):
        self._unwatch()
