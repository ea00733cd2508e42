import logging
import os

import numpy as np
import taichi as ti

logger = logging.getLogger(__name__)


def to_rgb(values, mode='normal'):
    if values.ndim == 2:
        values = values[:, :, None]

    rgb = np.zeros(values.shape[:2] + (3, ), dtype=np.float32)
    channels = min(values.shape[2], 3)
    rgb[:, :, :channels] = np.abs(values[:, :, :channels])
    if values.shape[2] == 1:
        rgb[:, :, 1] = rgb[:, :, 0]
        rgb[:, :, 2] = rgb[:, :, 0]

    if mode == 'luminance':
        lum = rgb @ np.array([0.2126, 0.7152, 0.0722], dtype=np.float32)
        rgb = np.repeat(lum[:, :, None], 3, axis=2)
    elif mode != 'normal':
        raise ValueError("Mode {} not supported".format(mode))

    return np.clip(rgb, 0.0, 1.0)


'''
class image_renderer: writes one readout of the simulation per frame as a png
params:
    output_dir: directory receiving the images
    output_prefix: file name prefix
    mode: 'normal' (absolute channel values) or 'luminance'
    gain: multiplier applied before clipping to [0, 1]
'''


class image_renderer:
    def __init__(self, output_dir, output_prefix, mode='normal', gain=1.0):
        self.output_dir = output_dir
        self.output_prefix = output_prefix
        self.mode = mode
        self.gain = gain

        if not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir)

    def output_image(self, grid, frame_id):
        rgb = to_rgb(grid.to_numpy() * self.gain, self.mode)
        path = os.path.join(self.output_dir,
                            '{}_{:05d}.png'.format(self.output_prefix,
                                                   frame_id))
        ti.tools.imwrite((rgb * 255).astype(np.uint8), path)
        logger.debug("Wrote %s", path)
        return path
