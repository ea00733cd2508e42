import argparse
import logging
import math
import sys

import numpy as np
import taichi as ti

from stablefluid import force_input, setup_logging, simulation, solver_config
from stablefluid.renderer import image_renderer
from stablefluid.scenes import load_scene

logger = logging.getLogger("stablefluid.main")

parser = argparse.ArgumentParser(description='Stable fluids simulation')
parser.add_argument('scene', help='Simulation scene (Swirl, Collide)')
parser.add_argument('--width', type=int, default=512, help='Display width')
parser.add_argument('--height', type=int, default=512, help='Display height')
parser.add_argument('--frames', type=int, default=240,
                    help='Number of frames to simulate')
parser.add_argument('--scale', type=float,
                    help='Grid resolution relative to the display size')
parser.add_argument('--iterations', type=int,
                    help='Jacobi iterations per frame')
parser.add_argument('--timestep', help='Timestep, e.g. 1/60')
parser.add_argument('--colorDecay', type=float, help='Dye fading rate')
parser.add_argument('--noBoundaries', action='store_true',
                    help='Disable the reflective walls')
parser.add_argument('--visualize', default='color',
                    help='Field to export (color, velocity, divergence, pressure)')
parser.add_argument('--output', help='Directory receiving the images')
parser.add_argument('--arch', default='cpu', help='Taichi backend (cpu, gpu)')
parser.add_argument('--logLevel', default='INFO', help='Logging level')


def build_config(args):
    config = solver_config()
    if args.scale is not None:
        config.scale = args.scale
    if args.iterations is not None:
        config.iterations = args.iterations
    if args.timestep is not None:
        config.timestep = args.timestep
    if args.colorDecay is not None:
        config.color_decay = args.colorDecay
    if args.noBoundaries:
        config.boundaries = False
    return config


def main(args):
    setup_logging(getattr(logging, args.logLevel.upper(), logging.INFO))
    ti.init(arch=getattr(ti, args.arch), default_fp=ti.f32)

    config = build_config(args)
    sim = simulation(config, (args.width, args.height))
    inputs = force_input(config)

    try:
        strokes = load_scene(args.scene, args.width / args.height, args.frames)
        if args.visualize.lower() not in simulation.VISUALIZATIONS:
            raise ValueError("Visualization {} not supported".format(
                args.visualize))
    except ValueError as e:
        logger.error(str(e))
        return 1

    renderer = None
    if args.output:
        renderer = image_renderer(output_dir=args.output,
                                  output_prefix=args.visualize.lower())

    for frame in range(args.frames):
        for s in strokes:
            s.feed(inputs, frame)
        sim.step(inputs.sites())

        vel = sim.current_velocity().to_numpy()
        max_vel = float(np.max(np.linalg.norm(vel, 2, axis=2)))
        if math.isnan(max_vel) or math.isinf(max_vel):
            logger.warning("Numerical error at frame %d", frame)
            return 1

        div = np.abs(sim.current_divergence().to_numpy()).sum()
        logger.info("frame %d: dt = %.4f, maxv = %.4f, |div| = %.4f", frame,
                    config.timestep, max_vel, div)

        if renderer is not None:
            renderer.output_image(sim.current(args.visualize), frame)

    sim.close()
    return 0


if __name__ == '__main__':
    args = parser.parse_args()
    sys.exit(main(args))
