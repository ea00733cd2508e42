import taichi as ti
from stablefluid.utils import fetch, vec2


@ti.func
def subtract_gradient_cell(vf: ti.template(), pf: ti.template(), i, j):
    pl = fetch(pf, i - 1, j)
    pr = fetch(pf, i + 1, j)
    pb = fetch(pf, i, j - 1)
    pt = fetch(pf, i, j + 1)
    return vf[i, j] - 0.5 * vec2(pr - pl, pt - pb)


@ti.data_oriented
class gradient_subtraction_pass:
    def apply(self, velocity, pressure, out):
        assert out is not velocity
        assert out.resolution == velocity.resolution == pressure.resolution

        self.subtract_gradient(velocity.array, pressure.array, out.array)

    @ti.kernel
    def subtract_gradient(self, vf: ti.types.ndarray(), pf: ti.types.ndarray(),
                          new_vf: ti.types.ndarray()):
        for i, j in ti.ndrange(new_vf.shape[0], new_vf.shape[1]):
            new_vf[i, j] = subtract_gradient_cell(vf, pf, i, j)
