import os

import pandas as pd

from errors import GridStateError
from logger_helper import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = {".csv", ".parquet", ".xlsx"}


class UnsupportedFileType(GridStateError):
    pass


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileType(
                f"Unsupported file type {self.ext or '(none)'} (use .csv, .parquet, or .xlsx)"
            )

    def load_frame(self) -> pd.DataFrame:
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            logger.warning("%s is missing or empty", self.path)
            return pd.DataFrame()

        if self.ext == ".csv":
            try:
                return pd.read_csv(self.path)
            except pd.errors.EmptyDataError:
                return pd.DataFrame()
        if self.ext == ".parquet":
            self._ensure_engine("pyarrow", "Parquet")
            return pd.read_parquet(self.path)
        self._ensure_engine("openpyxl", "XLSX")
        return pd.read_excel(self.path, sheet_name=0)

    def load_rows(self) -> tuple[list[list], list[str]]:
        """Rows and header titles, with pandas missing values turned into None."""
        df = self.load_frame()
        headers = [str(c) for c in df.columns]
        df = df.astype(object).where(pd.notna(df), None)
        rows = [list(r) for r in df.itertuples(index=False, name=None)]
        logger.debug("Read %d rows from %s", len(rows), self.path)
        return rows, headers

    @staticmethod
    def _ensure_engine(module: str, label: str):
        try:
            __import__(module)
        except ImportError as exc:
            raise GridStateError(
                f"{label} support requires {module}. Install via: pip install {module}"
            ) from exc
