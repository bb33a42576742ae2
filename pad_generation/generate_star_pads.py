#!/usr/bin/env python3
"""
Generate star-shaped felt pad contours for a list of pad radii.

For every radius in the parameter file (or given with --radius):
  1) derive N (jag count), K (radial samples) and rf (overlap fraction),
  2) build the half-jag contour and expand it into the closed N-point star,
  3) write "<R>.svg" (and/or "<R>.gcode") into the output directory.

Each radius is independent. An invalid radius (e.g. R <= min_radius, which
leaves no overlap) aborts the run unless --skip-invalid is given.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from pad_generation.pad_parameters import geometry_for_radius, load_parameters, output_name
from pad_generation.path_writers import (
    DEFAULT_CUT_FEED,
    DEFAULT_PLUNGE_FEED,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_TRAVEL_FEED,
    DEFAULT_Z_DOWN,
    DEFAULT_Z_UP,
    write_star_gcode,
    write_star_svg,
)
from pad_generation.star_contour import breakpoints, build_star
from pad_generation.star_viewer import save_preview, show_preview


# ---------------- Defaults (CLI-overridable) ----------------
DEFAULT_OUT_DIR = "."
DEFAULT_FORMAT = "svg"
# ------------------------------------------------------------


def run(args: argparse.Namespace) -> List[Path]:
    params, radii = load_parameters(args.params)
    if args.radius:
        radii = list(args.radius)
    if not radii:
        print(f"[WARN] No radii given in {args.params} or on the command line; nothing to do.")
        return []

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    formats = ["svg", "gcode"] if args.format == "both" else [args.format]
    written: List[Path] = []

    for R in radii:
        print(f"Generating star for R = {R}")
        try:
            geom = geometry_for_radius(params, R)
        except ValueError as e:
            if not args.skip_invalid:
                raise
            print(f"[WARN] Skipping R = {R}: {e}")
            continue

        star = build_star(geom)
        s1, s2, s3 = breakpoints(geom)
        print(f"  jags N={geom.n_jags}, radial samples K={geom.n_samples}, half-jag points Kappa={star.kappa}")
        print(f"  rf={geom.overlap_fraction:.4f}, hf={geom.recovery_fraction:.4f}")
        print(f"  breakpoints: s1={s1:.3f}, s2={s2:.3f}, s3={s3:.3f}")
        print(f"  star points: {len(star.points)}, max radius: {star.max_radius:.3f}")
        if star.kappa == geom.n_samples:
            print(f"[info] R = {R}: no tapering tail (rf = {geom.overlap_fraction:.4f} leaves no tip arc).")

        if "svg" in formats:
            written.append(write_star_svg(star.points, str(out_dir / output_name(R, ".svg")), stroke_width=args.stroke_width))
            print(f"Wrote {written[-1]}")
        if "gcode" in formats:
            written.append(write_star_gcode(
                star.points,
                str(out_dir / output_name(R, ".gcode")),
                geometry=geom,
                cut_feed=args.feed,
                travel_feed=args.travel_feed,
                plunge_feed=args.plunge_feed,
                z_up=args.z_up,
                z_down=args.z_down,
            ))
            print(f"Wrote {written[-1]}")

        if args.preview_png:
            png = out_dir / output_name(R, ".png")
            save_preview(star.points, str(png), geometry=geom)
            print(f"Wrote {png}")
        if args.preview:
            show_preview(star.points, geometry=geom)

    return written


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Generate closed star-shaped felt pad contours (SVG and/or G-code) from a parameter file."
    )
    ap.add_argument("params", help="Parameter file: text (6 scalars followed by radii) or .json.")
    ap.add_argument("--out-dir", default=DEFAULT_OUT_DIR, help="Directory for the generated files (created if missing).")
    ap.add_argument("--format", choices=["svg", "gcode", "both"], default=DEFAULT_FORMAT, help="Output format.")
    ap.add_argument("--radius", type=float, action="append", default=None,
                    help="Pad radius to generate (repeatable). Overrides the radii in the parameter file.")
    ap.add_argument("--skip-invalid", action="store_true", default=False,
                    help="Warn and continue when a radius gives an undefined star (default: abort).")

    # SVG
    ap.add_argument("--stroke-width", type=float, default=DEFAULT_STROKE_WIDTH, help="SVG stroke width.")

    # G-code
    ap.add_argument("--feed", type=float, default=DEFAULT_CUT_FEED, help="Cutting feedrate (units/min).")
    ap.add_argument("--travel-feed", type=float, default=DEFAULT_TRAVEL_FEED, help="Travel/lift feedrate (units/min).")
    ap.add_argument("--plunge-feed", type=float, default=DEFAULT_PLUNGE_FEED, help="Tool-down feedrate (units/min).")
    ap.add_argument("--z-up", type=float, default=DEFAULT_Z_UP, help="Tool-up Z height.")
    ap.add_argument("--z-down", type=float, default=DEFAULT_Z_DOWN, help="Cutting Z height.")

    # Preview
    ap.add_argument("--preview", action="store_true", help="Show a matplotlib preview of each star.")
    ap.add_argument("--preview-png", action="store_true", help="Save a '<R>.png' preview next to each output.")
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    run(build_parser().parse_args(argv))


if __name__ == "__main__":
    main()
