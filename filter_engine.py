import pandas as pd

from data_model import DataModel
from logger_helper import get_logger
from view_models import RowViewModel

logger = get_logger(__name__)


class FilterEngine:
    """Free-text search plus an ordered stack of named filters.

    Every query is a case-insensitive substring match against the string
    form of the searchable columns. The visible set is always rebuilt from
    the full row set: live search text AND every named filter.
    """

    def __init__(self, model: DataModel | None = None, searchable_columns=None):
        self.search_text = ""
        self.filters: list[str] = []
        self._model = None
        self._searchable = None
        self._haystack = None
        self._match_cache: dict[str, frozenset[int]] = {}
        self.reset(model or DataModel(), searchable_columns)

    def reset(self, model: DataModel, searchable_columns=None):
        """Bind to a new dataset; clears search text, filters and cache."""
        self._model = model
        self._searchable = (
            None if searchable_columns is None else frozenset(searchable_columns)
        )
        self.search_text = ""
        self.filters = []
        self._match_cache = {}
        self._haystack = None

    # ----- searchable columns -----
    def searchable_indices(self) -> list[int]:
        titles = self._model.header_titles
        if self._searchable is None:
            return list(range(len(titles)))
        return [idx for idx, title in enumerate(titles) if title in self._searchable]

    def _searchable_frame(self) -> pd.DataFrame:
        if self._haystack is None:
            text = self._model.text_frame
            cols = self.searchable_indices()
            if not cols or len(text) == 0:
                self._haystack = text[cols]
            else:
                self._haystack = text[cols].apply(lambda col: col.str.casefold())
        return self._haystack

    # ----- matching -----
    def match_positions(self, query: str) -> frozenset[int]:
        """Positions in the full row set whose searchable cells contain ``query``."""
        if query in self._match_cache:
            return self._match_cache[query]
        haystack = self._searchable_frame()
        if haystack.shape[1] == 0 or len(haystack) == 0:
            hits = frozenset()
        else:
            needle = query.casefold()
            mask = haystack.apply(
                lambda col: col.str.contains(needle, regex=False)
            ).any(axis=1)
            hits = frozenset(int(i) for i in mask.to_numpy().nonzero()[0])
        self._match_cache[query] = hits
        return hits

    def active_queries(self) -> list[str]:
        queries = [self.search_text] if self.search_text else []
        return queries + [f for f in self.filters if f]

    def apply(self, full_rows: list[RowViewModel]) -> list[RowViewModel]:
        queries = self.active_queries()
        # only the live search text and filters stay memoised
        self._match_cache = {
            q: hits for q, hits in self._match_cache.items() if q in queries
        }
        if not queries:
            return list(full_rows)
        keep = None
        for query in queries:
            hits = self.match_positions(query)
            keep = hits if keep is None else keep & hits
            if not keep:
                break
        visible = [row for pos, row in enumerate(full_rows) if pos in keep]
        logger.debug(
            "Filtered %d of %d rows with %d queries",
            len(visible),
            len(full_rows),
            len(queries),
        )
        return visible

    # ----- mutations -----
    def set_search_text(self, text: str | None) -> bool:
        text = text or ""
        if text == self.search_text:
            return False
        self.search_text = text
        return True

    def add_filter(self, text: str) -> bool:
        if text in self.filters:
            return False
        self.filters.append(text)
        return True

    def set_single_filter(self, text: str) -> bool:
        changed = self.filters != [text]
        self.filters = [text]
        return changed

    def remove_filter(self, text: str) -> bool:
        if text not in self.filters:
            return False
        self.filters.remove(text)
        return True

    def clear_filters(self) -> bool:
        if not self.filters:
            return False
        self.filters = []
        return True
