"""Archive export formats."""

from .csv_export import CSV_HEADERS, export_archive, export_csv, export_filename

__all__ = ["CSV_HEADERS", "export_archive", "export_csv", "export_filename"]
