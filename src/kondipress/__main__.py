import argparse
import logging
import sys
from typing import Optional

from kondipress.constants import DEFAULT_FILENAME, DEFAULT_QUALITY, Resample
from kondipress.errors import KondipressError
from kondipress.layout import compute_layout
from kondipress.loader import load_images
from kondipress.selection import PhotoSelection
from kondipress.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="kondipress: merge photos side by side."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    merge_parser = subparsers.add_parser("merge", help="Merge photos into a JPEG")
    merge_parser.add_argument("input_files", nargs="+", help="Input photos, in order")
    merge_parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_FILENAME,
        help="Output JPEG file [default: %(default)s]",
    )
    merge_parser.add_argument(
        "-q",
        "--quality",
        type=int,
        default=DEFAULT_QUALITY,
        help="JPEG quality, 1-95 [default: %(default)s]",
    )
    merge_parser.add_argument(
        "--background",
        default="white",
        help="Color under transparent pixels [default: %(default)s]",
    )
    merge_parser.add_argument(
        "--resample",
        default=Resample.LANCZOS.name.lower(),
        choices=[r.name.lower() for r in Resample],
        help="Resampling filter [default: %(default)s]",
    )

    layout_parser = subparsers.add_parser(
        "layout", help="Show the layout without rendering"
    )
    layout_parser.add_argument("input_files", nargs="+", help="Input photos, in order")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    level = logging.DEBUG if args.verbose else logging.INFO
    for name in ("kondipress", __name__):
        logging.getLogger(name).setLevel(level)

    try:
        sources = load_images(args.input_files)
        if args.command == "merge":
            selection = PhotoSelection()
            selection.add(*sources)
            selection.merge(
                quality=args.quality,
                background=args.background,
                resample=Resample[args.resample.upper()],
            )
            selection.save(args.output)
            logger.info("Saved %s" % args.output)

        elif args.command == "layout":
            layout = compute_layout(source.size for source in sources)
            print("size: %dx%d" % layout.size)
            for source, width, offset, box in zip(
                sources, layout.scaled_widths, layout.offsets, layout.boxes
            ):
                print(
                    "%s: %dx%d -> %.2fx%d at x=%.2f, box=%r"
                    % (
                        (source.name,)
                        + source.size
                        + (width, layout.height, offset, box)
                    )
                )
    except (KondipressError, ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    return None


if __name__ == "__main__":
    sys.exit(main())
