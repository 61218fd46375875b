"""CSV/parquet-backed read-only DataSource adapter for OHLCV history."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

from pydantic import ValidationError

from signalbench.core.errors import DataSourceError
from signalbench.core.models import PriceBar
from signalbench.core.ports import DataSource

logger = logging.getLogger(__name__)


def _pandas_reader(path: Path) -> object:
    # Lazily import pandas to keep core contracts independent of it.
    import pandas as pd

    suffix = path.suffix.lower()
    if suffix == ".csv":
        read = pd.read_csv
    elif suffix in (".parquet", ".pq"):
        read = pd.read_parquet
    else:
        raise DataSourceError(f"Unsupported data file type '{suffix}' for {path}")

    try:
        return read(path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise DataSourceError(f"Cannot parse {path}: {exc}") from exc
    except (OSError, ImportError, ValueError) as exc:
        # missing file, missing parquet engine, corrupt file
        raise DataSourceError(f"Cannot read {path}: {exc}") from exc


class FileDataSource(DataSource):
    """Load bars from a single CSV or parquet file in read-only mode."""

    REQUIRED_COLUMNS: tuple[str, ...] = ("open", "high", "low", "close")

    def __init__(
        self,
        path: str | Path,
        *,
        read_frame: Callable[[Path], object] | None = None,
    ) -> None:
        self.path = Path(path)
        self._read_frame = read_frame or _pandas_reader

    def get_bars(self) -> Sequence[PriceBar]:
        frame = self._read_frame(self.path)
        bars = self._frame_to_bars(frame)
        logger.info(f"Loaded {len(bars)} bars from {self.path}")
        return bars

    def _frame_to_bars(self, frame: object) -> list[PriceBar]:
        if not hasattr(frame, "columns"):
            raise DataSourceError("read_frame must return a dataframe-like object with columns")

        columns = set(getattr(frame, "columns"))
        missing = [column for column in self.REQUIRED_COLUMNS if column not in columns]
        if missing:
            raise DataSourceError(f"Missing required columns in {self.path}: {missing}")

        if "timestamp" not in columns:
            if not hasattr(frame, "reset_index"):
                raise DataSourceError("Dataframe must provide a timestamp column or index")
            frame = frame.reset_index()
            columns = set(getattr(frame, "columns"))
        if "timestamp" not in columns:
            raise DataSourceError("Dataframe must contain timestamp values")

        if hasattr(frame, "sort_values"):
            frame = frame.sort_values("timestamp")

        has_volume = "volume" in columns
        bars: list[PriceBar] = []
        for index, row in enumerate(frame.to_dict(orient="records")):
            ts = row["timestamp"]
            if hasattr(ts, "to_pydatetime"):
                ts = ts.to_pydatetime()
            elif hasattr(ts, "item"):
                ts = ts.item()  # numpy scalar
            if isinstance(ts, float) and math.isnan(ts):
                raise DataSourceError(f"Row {index}: missing timestamp")
            if not isinstance(ts, (datetime, str, int, float)):
                raise DataSourceError(f"Row {index}: unsupported timestamp {ts!r}")

            volume = row.get("volume") if has_volume else None
            if isinstance(volume, float) and math.isnan(volume):
                volume = None

            try:
                bars.append(
                    PriceBar(
                        timestamp=ts,
                        open=float(row["open"]),
                        high=float(row["high"]),
                        low=float(row["low"]),
                        close=float(row["close"]),
                        volume=None if volume is None else float(volume),
                    )
                )
            except (ValidationError, TypeError, ValueError) as exc:
                raise DataSourceError(f"Row {index} of {self.path} is not a valid bar: {exc}") from exc
        return bars
