import taichi as ti
from stablefluid.utils import fetch


@ti.func
def divergence_cell(vf: ti.template(), i, j):
    vl = fetch(vf, i - 1, j)[0]
    vr = fetch(vf, i + 1, j)[0]
    vb = fetch(vf, i, j - 1)[1]
    vt = fetch(vf, i, j + 1)[1]
    return 0.5 * ((vr - vl) + (vt - vb))


@ti.data_oriented
class divergence_pass:
    def apply(self, velocity, out):
        assert out.resolution == velocity.resolution

        self.divergence(velocity.array, out.array)

    @ti.kernel
    def divergence(self, vf: ti.types.ndarray(), div: ti.types.ndarray()):
        for i, j in ti.ndrange(div.shape[0], div.shape[1]):
            div[i, j] = divergence_cell(vf, i, j)
