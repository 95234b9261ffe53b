import json
import os
from dataclasses import dataclass, field, replace

from logger_helper import get_logger
from view_models import SortType

logger = get_logger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridstate")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")


@dataclass(frozen=True)
class ColumnOrder:
    index: int
    order: SortType = SortType.ASCENDING


@dataclass(frozen=True)
class TableConfig:
    # None searches every column
    searchable_columns: frozenset[str] | None = None
    minimum_column_width: float = 70.0
    scale_columns_to_fill_frame: bool = True
    default_sort_column: int | None = None
    default_sort_direction: SortType = SortType.ASCENDING
    sort_indicator_allowance: float = 50.0
    cell_horizontal_margin: float = 8.0
    character_width: float = 7.0
    header_character_width: float = 8.5
    default_row_height: float = 44.0
    extra: dict = field(default_factory=dict, compare=False)

    @property
    def default_ordering(self) -> ColumnOrder | None:
        if self.default_sort_column is None:
            return None
        return ColumnOrder(self.default_sort_column, self.default_sort_direction)

    def with_options(self, **overrides) -> "TableConfig":
        if "searchable_columns" in overrides and overrides["searchable_columns"] is not None:
            overrides["searchable_columns"] = frozenset(overrides["searchable_columns"])
        return replace(self, **overrides)


_NUMBER_FIELDS = (
    "minimum_column_width",
    "sort_indicator_allowance",
    "cell_horizontal_margin",
    "character_width",
    "header_character_width",
    "default_row_height",
)


def config_from_dict(data) -> TableConfig:
    """Build a TableConfig, skipping any field with the wrong type."""
    if not isinstance(data, dict):
        logger.warning("Ignoring config: expected an object, got %s", type(data).__name__)
        return TableConfig()

    opts = {}
    cols = data.get("searchable_columns")
    if cols is not None:
        if isinstance(cols, list) and all(isinstance(c, str) for c in cols):
            opts["searchable_columns"] = frozenset(cols)
        else:
            logger.warning("Ignoring searchable_columns: expected a list of strings")

    for name in _NUMBER_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0:
            opts[name] = float(value)
        else:
            logger.warning("Ignoring %s: expected a non-negative number", name)

    scale = data.get("scale_columns_to_fill_frame")
    if isinstance(scale, bool):
        opts["scale_columns_to_fill_frame"] = scale
    elif scale is not None:
        logger.warning("Ignoring scale_columns_to_fill_frame: expected a boolean")

    sort_col = data.get("default_sort_column")
    if isinstance(sort_col, int) and not isinstance(sort_col, bool) and sort_col >= 0:
        opts["default_sort_column"] = sort_col
    elif sort_col is not None:
        logger.warning("Ignoring default_sort_column: expected a column index")

    direction = data.get("default_sort_direction")
    if direction is not None:
        try:
            opts["default_sort_direction"] = SortType.parse(direction)
        except ValueError:
            logger.warning("Ignoring default_sort_direction %r", direction)

    known = set(_NUMBER_FIELDS) | {
        "searchable_columns",
        "scale_columns_to_fill_frame",
        "default_sort_column",
        "default_sort_direction",
    }
    extra = {k: v for k, v in data.items() if k not in known}
    return TableConfig(extra=extra, **opts)


def load_config(path: str | None = None) -> TableConfig:
    path = path or CONFIG_JSON
    if not os.path.exists(path):
        return TableConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read config %s: %s", path, exc)
        return TableConfig()
    return config_from_dict(data)
