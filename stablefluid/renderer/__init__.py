from .image_renderer import image_renderer, to_rgb
