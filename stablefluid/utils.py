import taichi as ti


@ti.pyfunc
def clamp(x, a, b):
    return max(a, min(b, x))


@ti.pyfunc
def lerp(a, b, t):
    return a + t * (b - a)


@ti.pyfunc
def smoothstep(edge0, edge1, x):
    t = clamp((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


@ti.pyfunc
def vec2(x, y):
    return ti.Vector([x, y])


@ti.func
def fetch(qf: ti.template(), i, j):
    # clamp to edge, no wraparound
    ci = clamp(i, 0, qf.shape[0] - 1)
    cj = clamp(j, 0, qf.shape[1] - 1)
    return qf[ci, cj]


@ti.func
def bilerp(qf: ti.template(), x, y):
    ix, iy = int(ti.floor(x)), int(ti.floor(y))
    fx, fy = x - ix, y - iy
    a = fetch(qf, ix, iy)
    b = fetch(qf, ix + 1, iy)
    c = fetch(qf, ix, iy + 1)
    d = fetch(qf, ix + 1, iy + 1)
    return lerp(lerp(a, b, fx), lerp(c, d, fx), fy)


@ti.func
def sample(qf: ti.template(), pos, res_x, res_y):
    # pos is in cell coordinates of a res_x * res_y grid, qf may differ
    x = (pos[0] + 0.5) * (qf.shape[0] / res_x) - 0.5
    y = (pos[1] + 0.5) * (qf.shape[1] / res_y) - 0.5
    return bilerp(qf, x, y)
