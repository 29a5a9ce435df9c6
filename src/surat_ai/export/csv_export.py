"""CSV recap export of the letter archive."""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Sequence
from datetime import date

from ..core.interfaces import ExportFailure, StorageError
from ..core.models import LetterRecord
from ..storage.archive import ArchiveStore

LOGGER = logging.getLogger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "ID",
    "Jenis",
    "No. Surat",
    "Tanggal",
    "Pengirim",
    "Penerima",
    "Perihal",
    "Awal Acara",
    "Akhir Acara",
    "Tempat/Lokasi",
    "Ringkasan",
    "Tags",
    "Link Dokumen",
    "Data Custom (JSON)",
)


def _flatten(value: str | None) -> str:
    if not value:
        return ""
    return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def record_row(record: LetterRecord) -> list[str]:
    """Return the export columns for one letter."""
    custom = json.dumps(
        [item.to_dict() for item in record.custom_fields],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return [
        record.id,
        record.type.value,
        _flatten(record.reference_number),
        record.date,
        _flatten(record.sender),
        _flatten(record.recipient),
        _flatten(record.subject),
        record.event_start or "",
        record.event_end or "",
        _flatten(record.location),
        _flatten(record.summary),
        _flatten(", ".join(record.tags)),
        record.document_url,
        _flatten(custom),
    ]


def export_csv(records: Sequence[LetterRecord]) -> str:
    """Serialise ``records`` to a fully quoted CSV table."""
    if not records:
        raise ExportFailure("No data to export.")
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for record in records:
        writer.writerow(record_row(record))
    # rows are joined by newlines without a trailing one
    return buffer.getvalue().removesuffix("\n")


def export_filename(today: date | None = None) -> str:
    """Return ``rekap_surat_{YYYY-MM-DD}.csv`` for the export date."""
    return f"rekap_surat_{(today or date.today()).isoformat()}.csv"


def export_archive(archive: ArchiveStore, today: date | None = None) -> tuple[str, str]:
    """Export the whole archive, returning ``(filename, csv_text)``."""
    try:
        records = archive.all()
    except StorageError as exc:
        raise ExportFailure("Archive could not be read for export.") from exc
    content = export_csv(records)
    filename = export_filename(today)
    LOGGER.info("Exported %d letter(s) to %s", len(records), filename)
    return filename, content


__all__ = [
    "CSV_HEADERS",
    "export_archive",
    "export_csv",
    "export_filename",
    "record_row",
]
