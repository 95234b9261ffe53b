class GridStateError(Exception):
    """Base class for errors raised by the table engine."""


class ShapeMismatch(GridStateError, ValueError):
    def __init__(self, row_index: int, expected: int, actual: int, what: str = "row"):
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        self.what = what
        super().__init__(
            f"{what} {row_index} has {actual} cells, expected {expected}"
        )


class IndexOutOfRange(GridStateError, IndexError):
    def __init__(self, index: int, column_count: int):
        self.index = index
        self.column_count = column_count
        super().__init__(
            f"Column index {index} out of range [0, {column_count})"
        )
