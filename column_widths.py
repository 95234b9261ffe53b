import numpy as np

from data_model import DataModel
from logger_helper import get_logger

logger = get_logger(__name__)


class ColumnWidthCalculator:
    MINIMUM_COLUMN_WIDTH = 70.0
    SORT_INDICATOR_ALLOWANCE = 50.0
    CELL_HORIZONTAL_MARGIN = 8.0

    def __init__(
        self,
        minimum_column_width: float = MINIMUM_COLUMN_WIDTH,
        scale_columns_to_fill_frame: bool = True,
        sort_indicator_allowance: float = SORT_INDICATOR_ALLOWANCE,
        cell_horizontal_margin: float = CELL_HORIZONTAL_MARGIN,
    ):
        self.minimum_column_width = minimum_column_width
        self.scale_columns_to_fill_frame = scale_columns_to_fill_frame
        self.sort_indicator_allowance = sort_indicator_allowance
        self.cell_horizontal_margin = cell_horizontal_margin

    @classmethod
    def from_config(cls, config) -> "ColumnWidthCalculator":
        return cls(
            minimum_column_width=config.minimum_column_width,
            scale_columns_to_fill_frame=config.scale_columns_to_fill_frame,
            sort_indicator_allowance=config.sort_indicator_allowance,
            cell_horizontal_margin=config.cell_horizontal_margin,
        )

    def automatic_width(self, model: DataModel, column_index: int) -> float:
        content = (
            model.average_content_width(column_index)
            + self.sort_indicator_allowance
            + 2 * self.cell_horizontal_margin
        )
        return max(
            content,
            self.minimum_column_width,
            model.header_label_width(column_index),
        )

    def compute_widths(self, model: DataModel, frame_width: float) -> list[float]:
        widths = np.array(
            [self.automatic_width(model, c) for c in range(model.column_count)],
            dtype=float,
        )
        if self.scale_columns_to_fill_frame:
            widths = self.scale_to_fill(widths, frame_width)
        return widths.tolist()

    @staticmethod
    def scale_to_fill(widths: np.ndarray, frame_width: float) -> np.ndarray:
        """Hand the slack to each column in proportion to its width, in one pass."""
        total = widths.sum()
        if total <= 0 or total >= frame_width:
            return widths
        gap = frame_width - total
        logger.debug("Distributing %.1f of slack over %d columns", gap, len(widths))
        return widths + gap * widths / total


def content_width(widths, row_header_width: float = 0.0) -> float:
    return float(row_header_width + sum(widths))
