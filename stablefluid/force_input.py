import colorsys
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

HUE_STEP = 0.618033988749895


@dataclass
class force_site:
    id: int
    position: tuple
    impulse: tuple = (0.0, 0.0)
    radius: float = 0.25
    color: tuple = (1.0, 1.0, 1.0)
    smoothed: tuple = field(default=None, repr=False)

    def __post_init__(self):
        if self.smoothed is None:
            self.smoothed = self.position


'''
class force_input: tracks one force site per active pointer
params:
    config: solver_config, provides radius and smoothing
    positions are normalized, x in [0, aspect] and y in [0, 1] with y pointing up
'''


class force_input:
    def __init__(self, config):
        self.config = config
        self._sites = {}
        self._hue = 0.0

    def __len__(self):
        return len(self._sites)

    def next_color(self):
        self._hue = (self._hue + HUE_STEP) % 1.0
        return colorsys.hsv_to_rgb(self._hue, 1.0, 1.0)

    def on_force_start(self, id, position):
        position = (float(position[0]), float(position[1]))
        self._sites[id] = force_site(id=id,
                                     position=position,
                                     radius=self.config.radius,
                                     color=self.next_color())
        logger.debug("Force site %s started at %s", id, position)

    def on_force_move(self, id, position):
        site = self._sites.get(id)
        if site is None:
            return

        s = self.config.smoothing
        old_x, old_y = site.smoothed
        new_x = old_x * s + float(position[0]) * (1 - s)
        new_y = old_y * s + float(position[1]) * (1 - s)

        # the impulse is kept until the next move
        site.impulse = (new_x - old_x, new_y - old_y)
        site.position = (new_x, new_y)
        site.smoothed = (new_x, new_y)
        site.radius = self.config.radius

    def on_force_end(self, id):
        if self._sites.pop(id, None) is not None:
            logger.debug("Force site %s ended", id)

    on_force_cancel = on_force_end

    def sites(self):
        return list(self._sites.values())

    def clear(self):
        self._sites.clear()
