import numpy as np
import taichi as ti
from stablefluid.utils import clamp, sample, smoothstep, vec2


def pack_sites(sites):
    # x, y, dx, dy, radius | r, g, b
    params = np.zeros((max(len(sites), 1), 5), dtype=np.float32)
    colors = np.zeros((max(len(sites), 1), 3), dtype=np.float32)
    for k, site in enumerate(sites):
        params[k, 0:2] = site.position
        params[k, 2:4] = site.impulse
        params[k, 4] = site.radius
        colors[k] = site.color
    return params, colors


@ti.func
def falloff(uv, center, radius):
    d = (uv - center).norm()
    return 1.0 - smoothstep(0.0, radius, d)


@ti.func
def cell_uv(i, j, res_x, res_y):
    # x spans [0, aspect] like the force site positions
    aspect = res_x / res_y
    return vec2((i + 0.5) / res_x * aspect, (j + 0.5) / res_y)


'''
class touch_force_pass: adds the impulse of every active force site to the velocity field
    each site contributes impulse * strength weighted by 1 - smoothstep(0, radius, distance)
'''


@ti.data_oriented
class touch_force_pass:
    def __init__(self, strength=1.0):
        self.strength = strength

    def apply(self, velocity, sites, out, strength=None):
        if strength is None:
            strength = self.strength
        assert out is not velocity

        params, _ = pack_sites(sites)
        self.splat_velocity(velocity.array, out.array, params, len(sites),
                            strength)

    @ti.kernel
    def splat_velocity(self, vf: ti.types.ndarray(), new_vf: ti.types.ndarray(),
                       params: ti.types.ndarray(), n_sites: ti.i32,
                       strength: ti.f32):
        res_x, res_y = new_vf.shape[0], new_vf.shape[1]
        for i, j in ti.ndrange(new_vf.shape[0], new_vf.shape[1]):
            uv = cell_uv(i, j, res_x, res_y)
            momentum = vec2(0.0, 0.0)
            for s in range(n_sites):
                w = falloff(uv, vec2(params[s, 0], params[s, 1]), params[s, 4])
                momentum += w * vec2(params[s, 2], params[s, 3])

            vel = sample(vf, vec2(ti.cast(i, ti.f32), ti.cast(j, ti.f32)),
                         res_x, res_y)
            new_vf[i, j] = vel + momentum * strength


'''
class touch_color_pass: deposits the colour of every active force site into the dye field
    deposits share the radial falloff of touch_force_pass and the result is
    clamped to the displayable range [0, 1]
'''


@ti.data_oriented
class touch_color_pass:
    def apply(self, dye, sites, out):
        assert out is not dye

        params, colors = pack_sites(sites)
        self.splat_dye(dye.array, out.array, params, colors, len(sites))

    @ti.kernel
    def splat_dye(self, qf: ti.types.ndarray(), new_qf: ti.types.ndarray(),
                  params: ti.types.ndarray(), colors: ti.types.ndarray(),
                  n_sites: ti.i32):
        res_x, res_y = new_qf.shape[0], new_qf.shape[1]
        for i, j in ti.ndrange(new_qf.shape[0], new_qf.shape[1]):
            uv = cell_uv(i, j, res_x, res_y)
            c = sample(qf, vec2(ti.cast(i, ti.f32), ti.cast(j, ti.f32)),
                       res_x, res_y)
            for s in range(n_sites):
                w = falloff(uv, vec2(params[s, 0], params[s, 1]), params[s, 4])
                for k in ti.static(range(3)):
                    c[k] += w * colors[s, k]

            for k in ti.static(range(3)):
                c[k] = clamp(c[k], 0.0, 1.0)
            new_qf[i, j] = c
