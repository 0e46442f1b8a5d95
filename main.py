"""
main.py
-------
Demo for the frame_math kernel.

Walks a rotation through its Euler, quaternion and basis forms, composes a
parent/child transform, and prints a palette sample.

Run with:
    python main.py
    python main.py --palette-size 12 --start-hue 200
    python main.py --seed 7 --verbose
"""

import argparse
import logging

import numpy as np

from frame_math import InfinitePalette, PaletteOptions, Transform
from frame_math.basis import (
    basis_from_euler_deg,
    basis_rotate_local,
    basis_rotate_vec3,
    basis_slerp,
    basis_to_euler_deg,
    basis_to_quat,
)
from frame_math.color import hex_to_rgb, rgb_to_hsv
from frame_math.quat import quat_to_angle_axis


def section(msg: str) -> None:
    print(f"\n{'─' * 58}")
    print(f"  {msg}")
    print(f"{'─' * 58}\n")


def _fmt(v) -> str:
    return "(" + ", ".join(f"{x:8.3f}" for x in np.asarray(v)) + ")"


def rotation_walkthrough() -> None:
    section("Rotation: Euler -> basis -> quaternion")
    euler = (30.0, 45.0, 60.0)
    b = basis_from_euler_deg(euler)
    q = basis_to_quat(b)
    angle, axis = quat_to_angle_axis(q)
    print(f"[frame_math] euler (deg)     {_fmt(euler)}")
    print(f"[frame_math] quaternion      {_fmt(q)}")
    print(f"[frame_math] angle/axis      {np.degrees(angle):8.3f}° about {_fmt(axis)}")
    print(f"[frame_math] back to euler   {_fmt(basis_to_euler_deg(b))}")
    print(f"[frame_math] X axis -> {_fmt(basis_rotate_vec3(b, (1, 0, 0)))}")

    local = basis_rotate_local(b, (0, 0, 1), np.radians(90))
    print(f"[frame_math] +90° about local Z  {_fmt(basis_to_euler_deg(local))}")

    section("Slerp from identity")
    start = basis_from_euler_deg((0, 0, 0))
    for t in (0.0, 0.25, 0.5, 0.75, 1.0):
        print(f"[frame_math] t={t:4.2f}  euler {_fmt(basis_to_euler_deg(basis_slerp(start, b, t)))}")


def transform_walkthrough() -> None:
    section("Transform composition")
    parent = Transform(position=(1.0, 0.0, 0.0), rotation=(0.0, 0.0, 90.0))
    child = Transform(position=(0.0, 0.0, 1.0), rotation=(0.0, 45.0, 0.0))
    world = parent.compose(child)
    print(f"[frame_math] world position  {_fmt(world.position)}")
    print(f"[frame_math] world rotation  {_fmt(world.rotation)}")


def palette_sample(size: int, start_hue, seed) -> None:
    section(f"Palette ({size} colors)")
    palette = InfinitePalette(PaletteOptions(start_hue=start_hue), seed=seed)
    print(f"[frame_math] start hue {palette.start_hue:.2f}°")
    for i in range(size):
        hex_color = palette.next_hex()
        h, s, v = rgb_to_hsv(*hex_to_rgb(hex_color))
        print(f"  {i:3d}  {hex_color}  h={h:5.0f}  s={s:.2f}  v={v:.2f}")


def main() -> None:
    parser = argparse.ArgumentParser(description="frame_math demo")
    parser.add_argument("--palette-size", default=8,    type=int,   help="Colors to print (default: 8)")
    parser.add_argument("--start-hue",    default=None, type=float, help="Palette start hue in degrees (default: random)")
    parser.add_argument("--seed",         default=None, type=int,   help="Seed for the palette's random start hue")
    parser.add_argument("--verbose",      action="store_true",      help="Log degenerate-input fallbacks")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("=" * 58)
    print("  frame_math demo")
    print("=" * 58)

    rotation_walkthrough()
    transform_walkthrough()
    palette_sample(args.palette_size, args.start_hue, args.seed)


if __name__ == "__main__":
    main()
