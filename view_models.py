import enum

from cell_value import CellValue


class SortType(enum.Enum):
    UNSPECIFIED = "unspecified"
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def toggled(self) -> "SortType":
        if self is SortType.UNSPECIFIED:
            return SortType.ASCENDING
        if self is SortType.ASCENDING:
            return SortType.DESCENDING
        return SortType.UNSPECIFIED

    @classmethod
    def parse(cls, value) -> "SortType":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        aliases = {"asc": cls.ASCENDING, "desc": cls.DESCENDING, "none": cls.UNSPECIFIED}
        if text in aliases:
            return aliases[text]
        return cls(text)


class HeaderViewModel:
    def __init__(self, title: str, column_index: int, sort_type: SortType = SortType.UNSPECIFIED):
        self.title = title
        self.column_index = column_index
        self.sort_type = sort_type

    def __repr__(self):
        return f"HeaderViewModel({self.title!r}, {self.sort_type.value})"


class RowViewModel:
    """Display wrapper around one row.

    Equality and hashing use only the row values so that the same logical
    row is recognised across rebuilds. ``highlighted_column`` is transient.
    """

    __slots__ = ("values", "highlighted_column", "_display")

    def __init__(self, values: tuple[CellValue, ...]):
        self.values = tuple(values)
        self.highlighted_column: int | None = None
        self._display = None

    @property
    def display_strings(self) -> tuple[str, ...]:
        if self._display is None:
            self._display = tuple(v.string_representation for v in self.values)
        return self._display

    def is_highlighted(self, column_index: int) -> bool:
        return self.highlighted_column == column_index

    def __len__(self):
        return len(self.values)

    def __getitem__(self, column_index):
        return self.values[column_index]

    def __eq__(self, other):
        if not isinstance(other, RowViewModel):
            return NotImplemented
        return self.values == other.values

    def __hash__(self):
        return hash(self.values)

    def __repr__(self):
        return f"RowViewModel({list(self.display_strings)!r})"


# ----- header sort state transitions -----
def next_header_states(states, tapped_index: int) -> list[SortType]:
    """Return the header states after a tap on ``tapped_index``."""
    return [
        state.toggled() if idx == tapped_index else SortType.UNSPECIFIED
        for idx, state in enumerate(states)
    ]


def apply_column_order(states, column_index: int, direction: SortType) -> list[SortType]:
    return [
        direction if idx == column_index else SortType.UNSPECIFIED
        for idx in range(len(states))
    ]


def untoggle_all(states) -> list[SortType]:
    return [SortType.UNSPECIFIED for _ in states]


def active_sort(states) -> tuple[int, SortType] | None:
    for idx, state in enumerate(states):
        if state is not SortType.UNSPECIFIED:
            return idx, state
    return None


def build_row_view_models(rows) -> list[RowViewModel]:
    return [RowViewModel(row) for row in rows]


def build_header_view_models(titles, states=None) -> list[HeaderViewModel]:
    states = states or [SortType.UNSPECIFIED] * len(titles)
    return [
        HeaderViewModel(title, idx, states[idx]) for idx, title in enumerate(titles)
    ]
