from .advection import advection_pass, decay_factor
from .boundary import boundary_pass
from .divergence import divergence_pass
from .gradient import gradient_subtraction_pass
from .jacobi import jacobi_pass
from .touch import touch_color_pass, touch_force_pass, pack_sites
