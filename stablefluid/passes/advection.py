import taichi as ti
from stablefluid.utils import sample, vec2


@ti.pyfunc
def decay_factor(decay, dt):
    return 1.0 / (1.0 + max(decay, 0.0) * dt)


@ti.func
def advect_cell(velocity: ti.template(), source: ti.template(), i, j, res_x, res_y, dt, damping):
    pos = vec2(ti.cast(i, ti.f32), ti.cast(j, ti.f32))
    vel = sample(velocity, pos, res_x, res_y)

    # backtrace, RK-1
    prev = pos - dt * vel
    return damping * sample(source, prev, res_x, res_y)


'''
class advection_pass: semi-Lagrangian transport of a field along a velocity field
    velocity is measured in grid cells per unit time, sampling clamps to the
    edge texel and the sampled value is damped by 1 / (1 + decay * dt)
'''


@ti.data_oriented
class advection_pass:
    def __init__(self, decay=0.0):
        self.decay = decay

    def apply(self, velocity, source, out, dt, decay=None):
        if decay is None:
            decay = self.decay
        assert out is not source and out is not velocity

        self.advect(velocity.array, source.array, out.array, dt,
                    decay_factor(decay, dt))

    @ti.kernel
    def advect(self, vf: ti.types.ndarray(), qf: ti.types.ndarray(),
               new_qf: ti.types.ndarray(), dt: ti.f32, damping: ti.f32):
        for i, j in ti.ndrange(new_qf.shape[0], new_qf.shape[1]):
            new_qf[i, j] = advect_cell(vf, qf, i, j, new_qf.shape[0],
                                       new_qf.shape[1], dt, damping)
