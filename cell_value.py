import datetime
import enum
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd


class CellKind(enum.IntEnum):
    # value doubles as the tie-break rank for mixed-kind columns
    NIL = 0
    BOOLEAN = 1
    INTEGER = 2
    FLOAT = 3
    DATE = 4
    STRING = 5


_GROUPS = {
    CellKind.BOOLEAN: "bool",
    CellKind.INTEGER: "number",
    CellKind.FLOAT: "number",
    CellKind.DATE: "date",
    CellKind.STRING: "string",
}


@dataclass(frozen=True)
class CellValue:
    kind: CellKind
    value: Any = None

    @classmethod
    def of(cls, obj) -> "CellValue":
        if isinstance(obj, CellValue):
            return obj
        if obj is None:
            return NIL
        # pd.isna covers None, NaN, NaT and pd.NA; containers are not scalars
        if pd.api.types.is_scalar(obj) and pd.isna(obj):
            return NIL
        if isinstance(obj, (bool, np.bool_)):
            return cls(CellKind.BOOLEAN, bool(obj))
        if isinstance(obj, (int, np.integer)):
            return cls(CellKind.INTEGER, int(obj))
        if isinstance(obj, (float, np.floating)):
            return cls(CellKind.FLOAT, float(obj))
        if isinstance(obj, (datetime.date, np.datetime64)):
            return cls(CellKind.DATE, pd.Timestamp(obj))
        if isinstance(obj, str):
            return cls(CellKind.STRING, obj)
        return cls(CellKind.STRING, str(obj))

    @property
    def string_representation(self) -> str:
        kind = self.kind
        if kind == CellKind.NIL:
            return ""
        if kind == CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if kind == CellKind.FLOAT:
            if self.value.is_integer():
                return str(int(self.value))
            return repr(self.value)
        if kind == CellKind.DATE:
            ts = self.value
            if ts == ts.normalize():
                return ts.date().isoformat()
            return ts.isoformat()
        return str(self.value)

    def __str__(self):
        return self.string_representation

    def sort_key(self, mixed: bool = False) -> tuple:
        """Key for ordering cells of one column.

        Nil sorts first. In a column whose cells span more than one kind
        group, cells order by string representation, then by kind.
        """
        if self.kind == CellKind.NIL:
            return (0,)
        if mixed:
            return (1, self.string_representation, int(self.kind))
        return (1, self.value)


NIL = CellValue(CellKind.NIL, None)


def _group(cell: CellValue) -> str:
    # aware and naive timestamps do not compare with each other
    if cell.kind == CellKind.DATE and cell.value.tzinfo is not None:
        return "date-tz"
    return _GROUPS[cell.kind]


def is_mixed(cells) -> bool:
    groups = {_group(c) for c in cells if c.kind != CellKind.NIL}
    return len(groups) > 1


def column_sort_keys(cells, mixed: bool | None = None) -> list[tuple]:
    """Sort keys for one column.

    ``mixed`` is decided over the whole column when the caller only
    holds part of it; left as None it is worked out from ``cells``.
    """
    cells = list(cells)
    if mixed is None:
        mixed = is_mixed(cells)
    return [c.sort_key(mixed) for c in cells]


def to_row(values) -> tuple[CellValue, ...]:
    return tuple(CellValue.of(v) for v in values)
