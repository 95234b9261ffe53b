import numbers

import pandas as pd

from cell_value import CellValue, is_mixed, to_row
from errors import IndexOutOfRange, ShapeMismatch
from logger_helper import get_logger

logger = get_logger(__name__)


class DataModel:
    """Immutable snapshot of one loaded dataset.

    Rows are stored as tuples of CellValue. A parallel DataFrame of the
    cells' string representations backs the column statistics and the
    vectorised search.
    """

    def __init__(
        self,
        rows: tuple[tuple[CellValue, ...], ...] = (),
        header_titles: tuple[str, ...] = (),
        footer_titles: tuple[str, ...] = (),
        character_width: float = 7.0,
        header_character_width: float = 8.5,
    ):
        self._rows = rows
        self._header_titles = header_titles
        self._footer_titles = footer_titles
        self.character_width = character_width
        self.header_character_width = header_character_width
        self._text = pd.DataFrame(
            [[c.string_representation for c in row] for row in rows],
            columns=range(len(header_titles)),
            dtype=object,
        )
        self._lengths = None
        self._mixed: dict[int, bool] = {}

    @classmethod
    def load(
        cls,
        rows,
        header_titles,
        footer_titles=None,
        character_width: float = 7.0,
        header_character_width: float = 8.5,
    ) -> "DataModel":
        headers = tuple(str(t) for t in header_titles)
        expected = len(headers)
        footers = tuple(str(t) for t in (footer_titles or ()))
        if footers and len(footers) != expected:
            raise ShapeMismatch(0, expected, len(footers), what="footer")

        converted = []
        for idx, raw in enumerate(rows):
            row = to_row(raw)
            if len(row) != expected:
                logger.warning(
                    "Rejecting load: row %d has %d cells, expected %d",
                    idx,
                    len(row),
                    expected,
                )
                raise ShapeMismatch(idx, expected, len(row))
            converted.append(row)

        logger.debug("Loaded %d rows x %d columns", len(converted), expected)
        return cls(
            tuple(converted),
            headers,
            footers,
            character_width=character_width,
            header_character_width=header_character_width,
        )

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, **kwargs) -> "DataModel":
        rows = df.astype(object).itertuples(index=False, name=None)
        return cls.load(rows, [str(c) for c in df.columns], **kwargs)

    # ----- shape -----
    @property
    def header_titles(self) -> tuple[str, ...]:
        return self._header_titles

    @property
    def footer_titles(self) -> tuple[str, ...]:
        return self._footer_titles

    @property
    def rows(self) -> tuple[tuple[CellValue, ...], ...]:
        return self._rows

    @property
    def column_count(self) -> int:
        return len(self._header_titles)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def text_frame(self) -> pd.DataFrame:
        """String representations, one column per header position."""
        return self._text

    def check_column(self, column_index: int) -> int:
        if not isinstance(column_index, numbers.Integral) or not (
            0 <= column_index < self.column_count
        ):
            raise IndexOutOfRange(column_index, self.column_count)
        return int(column_index)

    def column_index(self, title: str) -> int | None:
        try:
            return self._header_titles.index(title)
        except ValueError:
            return None

    def cell(self, row: int, column: int) -> CellValue:
        self.check_column(column)
        return self._rows[row][column]

    def column_is_mixed(self, column_index: int) -> bool:
        """Whether the column holds cells of more than one kind group."""
        column_index = self.check_column(column_index)
        if column_index not in self._mixed:
            self._mixed[column_index] = is_mixed(row[column_index] for row in self._rows)
        return self._mixed[column_index]

    # ----- statistics -----
    def _text_lengths(self) -> pd.DataFrame:
        if self._lengths is None:
            self._lengths = self._text.apply(lambda col: col.str.len())
        return self._lengths

    def average_content_width(self, column_index: int) -> float:
        self.check_column(column_index)
        if self.row_count == 0:
            return 0.0
        mean_len = self._text_lengths()[column_index].mean()
        return float(mean_len) * self.character_width

    def header_label_width(self, column_index: int) -> float:
        self.check_column(column_index)
        return len(self._header_titles[column_index]) * self.header_character_width
