#!/usr/bin/env python3
"""
phongtrace - A minimal Python ray tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import math
import sys
import time
from pathlib import Path

from phongtrace.vec3 import Point3
from phongtrace.camera import Camera
from phongtrace.shapes import Sphere, Cylinder
from phongtrace.materials import PALETTE
from phongtrace.lights import Light
from phongtrace.scene import Scene
from phongtrace.renderer import Renderer, RenderSettings
from phongtrace.image_io import save_image
from phongtrace.scene_parser import SceneParseError, load_scene


def create_demo_scene() -> Scene:
    """Create the demo scene: a blue sphere and a green cylinder under two lights."""
    scene = Scene()

    scene.add(Sphere(Point3(2, -1, -20), 2, PALETTE['blue']))
    scene.add(Cylinder(Point3(-6, -3, -20), 2, 4, PALETTE['green']))

    scene.add_light(Light(Point3(-20, 20, 20), 1.5))
    scene.add_light(Light(Point3(20, 30, 20), 1.8))

    return scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='phongtrace - A minimal Python ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output cylinder.ppm
  python main.py --width 320 --height 240 --output small.png
  python main.py --scene-file scenes/demo.yaml --output demo.ppm
        '''
    )

    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (default: built-in demo)')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 1024)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 768)')
    parser.add_argument('--fov', type=float, default=90.0,
                        help='Vertical field of view in degrees for the demo scene (default: 90)')
    parser.add_argument('--output', type=str, default='cylinder.ppm', help='Output filename')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    print("=" * 60)
    print("phongtrace Ray Tracer")
    print("=" * 60)

    try:
        if args.scene_file:
            print(f"\nLoading scene: {args.scene_file}")
            scene, camera, settings = load_scene(args.scene_file)
        else:
            print("\nCreating scene: demo")
            scene = create_demo_scene()
            camera = Camera(fov=math.radians(args.fov))
            settings = RenderSettings()

        if args.width is not None or args.height is not None:
            settings = RenderSettings(
                width=args.width if args.width is not None else settings.width,
                height=args.height if args.height is not None else settings.height,
                background_color=settings.background_color
            )
    except (SceneParseError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"  Objects in scene: {len(scene)}")
    print(f"  Lights in scene: {len(scene.lights)}")
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    framebuffer = renderer.render(scene, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Primary rays per second: {(settings.width * settings.height) / elapsed:.0f}")

    output_path = Path(args.output)
    print(f"\nSaving to: {args.output}")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_image(framebuffer, output_path)
    except (OSError, ValueError) as e:
        print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
