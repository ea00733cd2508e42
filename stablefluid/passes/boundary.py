import taichi as ti


@ti.func
def reflect_cell(vf: ti.template(), i, j):
    vel = vf[i, j]
    # walls are one texel thick, the normal component is negated
    if i == 0 or i == vf.shape[0] - 1:
        vel[0] = -vel[0]
    if j == 0 or j == vf.shape[1] - 1:
        vel[1] = -vel[1]
    return vel


@ti.data_oriented
class boundary_pass:
    def apply(self, velocity, out):
        assert out is not velocity
        assert out.resolution == velocity.resolution

        self.reflect(velocity.array, out.array)

    @ti.kernel
    def reflect(self, vf: ti.types.ndarray(), new_vf: ti.types.ndarray()):
        for i, j in ti.ndrange(new_vf.shape[0], new_vf.shape[1]):
            new_vf[i, j] = reflect_cell(vf, i, j)
