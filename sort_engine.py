from cell_value import column_sort_keys
from errors import IndexOutOfRange
from logger_helper import get_logger
from view_models import RowViewModel, SortType

logger = get_logger(__name__)


def sort_rows(
    rows: list[RowViewModel],
    column_index: int,
    direction: SortType,
    column_count: int | None = None,
    mixed: bool | None = None,
) -> list[RowViewModel]:
    """Stable sort of ``rows`` by the cell at ``column_index``.

    Equal keys keep their prior relative order in both directions. Pass
    ``mixed`` when ``rows`` is a filtered subset so the comparison stays
    the one chosen for the whole column.
    """
    rows = list(rows)
    if column_count is None:
        column_count = len(rows[0]) if rows else column_index + 1
    if column_index < 0 or column_index >= column_count:
        raise IndexOutOfRange(column_index, column_count)
    if direction is SortType.UNSPECIFIED or len(rows) < 2:
        return rows

    keys = column_sort_keys((row[column_index] for row in rows), mixed)
    # sorting positions keeps equal keys in input order, reverse included
    order = sorted(
        range(len(rows)),
        key=keys.__getitem__,
        reverse=direction is SortType.DESCENDING,
    )
    logger.debug(
        "Sorted %d rows on column %d %s", len(rows), column_index, direction.value
    )
    return [rows[i] for i in order]
