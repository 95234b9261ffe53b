from typing import Protocol, Sequence

from view_models import SortType


class RenderingHost(Protocol):
    """What the table engine needs from the surface that draws it."""

    def frame_width(self) -> float: ...

    def height_for_row(self, position: int) -> float | None: ...

    def width_for_column(self, column_index: int) -> float | None: ...

    def fetch_data(self) -> tuple[list, list[str]] | None: ...

    def on_sort_changed(self, column_index: int, sort_type: SortType) -> None: ...

    def on_filter_changed(self, search_text: str, filters: Sequence[str]) -> None: ...


class NullRenderingHost:
    def frame_width(self) -> float:
        return 0.0

    def height_for_row(self, position: int) -> float | None:
        return None

    def width_for_column(self, column_index: int) -> float | None:
        return None

    def fetch_data(self):
        return None

    def on_sort_changed(self, column_index, sort_type):
        pass

    def on_filter_changed(self, search_text, filters):
        pass
