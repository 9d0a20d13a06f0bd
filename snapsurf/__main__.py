"""
Command-line interface.

    python -m snapsurf model.obj --smooth --report -o smoothed.obj
"""
import argparse
import logging
import sys

from snapsurf.logging_config import setup_logging
from snapsurf.quality import MeshQuality
from snapsurf.surface_io import SurfaceFormatError, read_surface, write_surface

logger = logging.getLogger("snapsurf.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snapsurf",
                                     description="Inspect, smooth and rewrite surface mesh files.")
    parser.add_argument("input", help="surface file to read")
    parser.add_argument("-o", "--output", help="write the mesh to this file")
    parser.add_argument("--smooth", action="store_true", help="recompute smooth node normals")
    parser.add_argument("--report", action="store_true", help="print a triangle quality report")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--log-file", help="also write the log to this file")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None, args.log_file)

    try:
        mesh = read_surface(args.input)
    except FileNotFoundError:
        return 1
    except SurfaceFormatError as err:
        logger.error("Could not read surface: %s", err)
        return 2

    mesh.update_face_normals()
    if args.smooth:
        mesh.shade_smooth()

    for key, value in mesh.stats().items():
        print(f"{key:>16}: {value}")

    if args.report:
        MeshQuality(mesh).print_report()

    if args.output:
        write_surface(mesh, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
