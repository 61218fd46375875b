"""Read-only price data sources."""

from signalbench.data.file_source import FileDataSource

__all__ = ["FileDataSource"]
