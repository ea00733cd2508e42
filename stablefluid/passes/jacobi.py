import taichi as ti
from stablefluid.utils import fetch


@ti.func
def jacobi_cell(pf: ti.template(), div: ti.template(), i, j, alpha, beta):
    pl = fetch(pf, i - 1, j)
    pr = fetch(pf, i + 1, j)
    pb = fetch(pf, i, j - 1)
    pt = fetch(pf, i, j + 1)
    return (pl + pr + pb + pt + alpha * div[i, j]) * beta


'''
class jacobi_pass: fixed-count Jacobi relaxation of the pressure Poisson equation
    alpha and beta follow from a uniform grid spacing of one texel. There is no
    convergence check: the iteration count trades quality for a bounded cost per
    frame, and pressure growing without bound under pathological input is
    neither detected nor corrected.
'''


@ti.data_oriented
class jacobi_pass:
    ALPHA = -1.0
    BETA = 0.25

    def iterate(self, pressure, divergence, out):
        assert out is not pressure
        assert out.resolution == divergence.resolution

        self.relax(pressure.array, divergence.array, out.array, self.ALPHA,
                   self.BETA)

    def solve(self, pressure, divergence, iterations):
        # warm start from the last iterate of the previous frame
        for _ in range(iterations):
            previous = pressure.read()
            self.iterate(previous, divergence, pressure.acquire_for_write())
        return pressure.read()

    @ti.kernel
    def relax(self, pf: ti.types.ndarray(), div: ti.types.ndarray(),
              new_pf: ti.types.ndarray(), alpha: ti.f32, beta: ti.f32):
        for i, j in ti.ndrange(new_pf.shape[0], new_pf.shape[1]):
            new_pf[i, j] = jacobi_cell(pf, div, i, j, alpha, beta)
