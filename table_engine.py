import contextlib
from dataclasses import dataclass

from column_widths import ColumnWidthCalculator, content_width
from data_model import DataModel
from diff_reconciler import RowDiff, diff_rows
from errors import GridStateError
from filter_engine import FilterEngine
from logger_helper import get_logger
from rendering_host import NullRenderingHost, RenderingHost
from sort_engine import sort_rows
from table_config import ColumnOrder, TableConfig
from view_models import (
    HeaderViewModel,
    RowViewModel,
    SortType,
    active_sort,
    apply_column_order,
    build_header_view_models,
    build_row_view_models,
    next_header_states,
    untoggle_all,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ViewUpdate:
    visible_rows: list[RowViewModel]
    diff: RowDiff


class TableEngine:
    """Owns the dataset, header sort state, filters and the visible rows.

    All mutations are synchronous and run to completion: recompute the
    visible set from the full set, re-apply the active sort, then diff
    against what was displayed before.
    """

    def __init__(self, host: RenderingHost | None = None, config: TableConfig | None = None):
        self.host = host or NullRenderingHost()
        self.config = config or TableConfig()
        self.model = DataModel()
        self.filter_engine = FilterEngine(self.model, self.config.searchable_columns)
        self.header_view_models: list[HeaderViewModel] = []
        self.footer_view_models: list[HeaderViewModel] = []
        self._all_rows: list[RowViewModel] = []
        self._visible: list[RowViewModel] = []
        self.highlighted_column: int | None = None
        self.last_tapped_column: int | None = None
        self._busy = False

    @contextlib.contextmanager
    def _mutation(self, name: str):
        if self._busy:
            raise GridStateError(f"{name} called while the table is recomputing")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    # ----- loading -----
    def load(self, rows, header_titles, config: TableConfig | None = None, footer_titles=None) -> ViewUpdate:
        config = config or self.config
        with self._mutation("load"):
            # raises ShapeMismatch before touching any state
            model = DataModel.load(
                rows,
                header_titles,
                footer_titles,
                character_width=config.character_width,
                header_character_width=config.header_character_width,
            )
            ordering = config.default_ordering
            if ordering is not None:
                model.check_column(ordering.index)

            old_visible = self._visible
            self.config = config
            self.model = model
            self.filter_engine.reset(model, config.searchable_columns)
            self._all_rows = build_row_view_models(model.rows)
            self.header_view_models = build_header_view_models(model.header_titles)
            self.footer_view_models = build_header_view_models(model.footer_titles)
            self._visible = list(self._all_rows)
            self.highlighted_column = None
            self.last_tapped_column = None

            if ordering is not None:
                self._apply_default_column_order(ordering)
            update = ViewUpdate(list(self._visible), diff_rows(old_visible, self._visible))
        logger.debug("Loaded table with %d rows", len(self._all_rows))
        return update

    def reload(self) -> ViewUpdate:
        payload = self.host.fetch_data()
        if payload is None:
            raise GridStateError("Rendering host has no data to reload")
        rows, header_titles = payload
        return self.load(rows, header_titles, self.config)

    def _apply_default_column_order(self, ordering: ColumnOrder):
        self._highlight(ordering.index)
        self._set_header_states(
            apply_column_order(self.header_states, ordering.index, ordering.order)
        )
        self._visible = self._sorted(self.filter_engine.apply(self._all_rows))

    # ----- header / sort -----
    @property
    def header_states(self) -> list[SortType]:
        return [h.sort_type for h in self.header_view_models]

    def _set_header_states(self, states):
        for header, state in zip(self.header_view_models, states):
            header.sort_type = state

    @property
    def active_sort(self) -> tuple[int, SortType] | None:
        return active_sort(self.header_states)

    def _sorted(self, rows):
        current = self.active_sort
        if current is None:
            return list(rows)
        column, direction = current
        return sort_rows(
            rows,
            column,
            direction,
            self.model.column_count,
            mixed=self.model.column_is_mixed(column),
        )

    def _highlight(self, column_index: int | None):
        self.highlighted_column = column_index
        for row in self._all_rows:
            row.highlighted_column = column_index

    def on_header_tap(self, column_index: int) -> ViewUpdate:
        with self._mutation("on_header_tap"):
            self.model.check_column(column_index)
            old_visible = self._visible
            self.last_tapped_column = column_index
            self._set_header_states(next_header_states(self.header_states, column_index))
            self._highlight(column_index)
            # back to unspecified shows the filtered rows in load order
            self._visible = self._sorted(self.filter_engine.apply(self._all_rows))
            update = ViewUpdate(list(self._visible), diff_rows(old_visible, self._visible))
            sort_type = self.header_view_models[column_index].sort_type
        logger.debug("Header %d tapped, now %s", column_index, sort_type.value)
        self.host.on_sort_changed(column_index, sort_type)
        return update

    def sort_by(self, column_index: int, direction: SortType) -> ViewUpdate:
        """Set an explicit column order without cycling."""
        with self._mutation("sort_by"):
            self.model.check_column(column_index)
            old_visible = self._visible
            self._apply_default_column_order(ColumnOrder(column_index, direction))
            if direction is SortType.UNSPECIFIED:
                self._visible = self.filter_engine.apply(self._all_rows)
            update = ViewUpdate(list(self._visible), diff_rows(old_visible, self._visible))
        self.host.on_sort_changed(column_index, direction)
        return update

    def clear_sort(self) -> ViewUpdate:
        with self._mutation("clear_sort"):
            old_visible = self._visible
            self._set_header_states(untoggle_all(self.header_states))
            self._visible = self.filter_engine.apply(self._all_rows)
            update = ViewUpdate(list(self._visible), diff_rows(old_visible, self._visible))
        return update

    # ----- search / filters -----
    def _refilter(self, name: str, mutate) -> ViewUpdate:
        with self._mutation(name):
            old_visible = self._visible
            mutate()
            self._visible = self._sorted(self.filter_engine.apply(self._all_rows))
            update = ViewUpdate(list(self._visible), diff_rows(old_visible, self._visible))
        self.host.on_filter_changed(self.search_text, tuple(self.filters))
        return update

    def set_search_text(self, text: str | None) -> ViewUpdate:
        return self._refilter("set_search_text", lambda: self.filter_engine.set_search_text(text))

    def add_filter(self, text: str) -> ViewUpdate:
        return self._refilter("add_filter", lambda: self.filter_engine.add_filter(text))

    def set_single_filter(self, text: str) -> ViewUpdate:
        return self._refilter("set_single_filter", lambda: self.filter_engine.set_single_filter(text))

    def remove_filter(self, text: str) -> ViewUpdate:
        return self._refilter("remove_filter", lambda: self.filter_engine.remove_filter(text))

    def clear_filters(self) -> ViewUpdate:
        return self._refilter("clear_filters", self.filter_engine.clear_filters)

    @property
    def search_text(self) -> str:
        return self.filter_engine.search_text

    @property
    def filters(self) -> list[str]:
        return list(self.filter_engine.filters)

    # ----- widths -----
    def compute_column_widths(self, frame_width: float | None = None) -> list[float]:
        if frame_width is None:
            frame_width = self.host.frame_width()
        calculator = ColumnWidthCalculator.from_config(self.config)
        widths = calculator.compute_widths(self.model, frame_width)
        for idx in range(len(widths)):
            override = self.host.width_for_column(idx)
            if override is not None:
                widths[idx] = float(override)
        return widths

    def content_width(self, frame_width: float | None = None) -> float:
        return content_width(self.compute_column_widths(frame_width))

    # ----- display queries -----
    @property
    def visible_rows(self) -> list[RowViewModel]:
        return list(self._visible)

    @property
    def all_rows(self) -> list[RowViewModel]:
        return list(self._all_rows)

    def number_of_rows(self) -> int:
        return len(self._visible)

    def number_of_columns(self) -> int:
        return self.model.column_count

    def row_at(self, position: int) -> RowViewModel:
        return self._visible[position]

    def value_at(self, position: int, column_index: int):
        self.model.check_column(column_index)
        return self._visible[position][column_index]

    def height_for_row(self, position: int) -> float:
        height = self.host.height_for_row(position)
        if height is None:
            return self.config.default_row_height
        return float(height)

    def header_title(self, column_index: int) -> str:
        return self.model.header_titles[self.model.check_column(column_index)]
