import argparse
import sys

from _version import __version__
from errors import GridStateError
from file_type_handler import FileTypeHandler
from logger_helper import configure_logging, get_logger
from table_config import load_config
from table_engine import TableEngine
from view_models import SortType

logger = get_logger(__name__)


class ConsoleHost:
    """Minimal host that renders into a fixed-width text frame."""

    def __init__(self, frame_width: float):
        self._frame_width = frame_width

    def frame_width(self) -> float:
        return self._frame_width

    def height_for_row(self, position):
        return None

    def width_for_column(self, column_index):
        return None

    def fetch_data(self):
        return None

    def on_sort_changed(self, column_index, sort_type):
        logger.info("Sort changed: column %d %s", column_index, sort_type.value)

    def on_filter_changed(self, search_text, filters):
        logger.info("Filter changed: search=%r filters=%r", search_text, list(filters))


_ARROWS = {
    SortType.ASCENDING: "^",
    SortType.DESCENDING: "v",
    SortType.UNSPECIFIED: "",
}


def render_table(engine: TableEngine, frame_width: float) -> str:
    widths = engine.compute_column_widths(frame_width)
    char_w = engine.config.character_width or 1.0
    cols = [max(1, int(w // char_w)) for w in widths]

    lines = []
    header = []
    for hvm, cw in zip(engine.header_view_models, cols):
        label = f"{hvm.title}{_ARROWS[hvm.sort_type]}"
        header.append(label[:cw].ljust(cw))
    lines.append(" ".join(header).rstrip())
    lines.append(" ".join("-" * cw for cw in cols))
    for row in engine.visible_rows:
        cells = [text[:cw].rjust(cw) for text, cw in zip(row.display_strings, cols)]
        lines.append(" ".join(cells))
    if engine.footer_view_models:
        lines.append(" ".join(f.title[:cw].ljust(cw) for f, cw in zip(engine.footer_view_models, cols)))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridstate",
        description="gridstate - sorted, filtered, width-fitted table views",
    )
    parser.add_argument("path", nargs="?", help=".csv, .parquet or .xlsx file")
    parser.add_argument("-v", "--version", action="store_true", help="print version and exit")
    parser.add_argument("--sort", type=int, metavar="COL", help="column index to sort by")
    parser.add_argument("--desc", action="store_true", help="sort descending")
    parser.add_argument("--search", default="", metavar="TEXT")
    parser.add_argument("--filter", action="append", default=[], metavar="TEXT")
    parser.add_argument("--searchable", action="append", metavar="NAME", help="searchable column title")
    parser.add_argument("--width", type=float, default=800.0, help="frame width in points")
    parser.add_argument("--config", metavar="FILE", help="JSON config file")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return 0
    if not args.path:
        build_parser().print_usage(sys.stderr)
        return 2

    configure_logging(args.verbose)
    config = load_config(args.config)
    if args.searchable:
        config = config.with_options(searchable_columns=args.searchable)

    engine = TableEngine(ConsoleHost(args.width), config)
    try:
        rows, headers = FileTypeHandler(args.path).load_rows()
        engine.load(rows, headers)
        if args.sort is not None:
            direction = SortType.DESCENDING if args.desc else SortType.ASCENDING
            engine.sort_by(args.sort, direction)
        if args.search:
            engine.set_search_text(args.search)
        for text in args.filter:
            engine.add_filter(text)
    except (GridStateError, OSError, ValueError) as exc:
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    print(render_table(engine, args.width))
    return 0


if __name__ == "__main__":
    sys.exit(main())
