"""I/O utilities: manifest export."""

from paxmanifest.io.export import (
    EXPORT_FORMATS,
    EXPORT_HEADERS,
    ExportTable,
    build_export_table,
    default_export_filename,
    write_export,
)

__all__ = [
    "EXPORT_FORMATS",
    "EXPORT_HEADERS",
    "ExportTable",
    "build_export_table",
    "default_export_filename",
    "write_export",
]
