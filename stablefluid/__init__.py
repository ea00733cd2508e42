from .config import solver_config, config_base, config_field, TIMESTEPS
from .force_input import force_input, force_site
from .grid import grid_buffer, multi_buffer
from .logging_config import setup_logging
from .simulation import simulation, grid_resolution

__version__ = "0.1.0"
