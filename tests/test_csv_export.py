"""Tests for the CSV recap export."""

from __future__ import annotations

import csv
import io
from collections.abc import Callable
from datetime import date

import pytest

from surat_ai.core.interfaces import ExportFailure
from surat_ai.core.models import CustomField, LetterRecord, LetterType
from surat_ai.export import CSV_HEADERS, export_archive, export_csv, export_filename
from surat_ai.storage import ArchiveStore, InMemoryKeyValueStore

RecordFactory = Callable[..., LetterRecord]


def test_every_cell_is_quoted_and_quotes_are_doubled(
    make_record: RecordFactory,
) -> None:
    content = export_csv([make_record(subject='Rapat "Penting"')])

    header, row = content.split("\n")
    assert header == ",".join(f'"{name}"' for name in CSV_HEADERS)
    assert '"Rapat ""Penting"""' in row
    assert row.startswith('"1","Masuk","001/INV/2023","2023-10-25",')


def test_rows_flatten_newlines_and_join_tags(make_record: RecordFactory) -> None:
    record = make_record(
        type=LetterType.OUTGOING,
        summary="Baris satu\nBaris dua\r\nBaris tiga",
        event_start="2023-10-28T09:00",
        event_end="2023-10-28T13:00",
        custom_fields=(CustomField("Anggaran", "Rp 5.000.000"),),
    )

    content = export_csv([record])
    rows = list(csv.reader(io.StringIO(content)))

    assert len(rows) == 2
    row = dict(zip(CSV_HEADERS, rows[1], strict=True))
    assert row["Jenis"] == "Keluar"
    assert row["Ringkasan"] == "Baris satu Baris dua Baris tiga"
    assert row["Awal Acara"] == "2023-10-28T09:00"
    assert row["Akhir Acara"] == "2023-10-28T13:00"
    assert row["Tags"] == "Undangan, Event"
    assert row["Data Custom (JSON)"] == '[{"key":"Anggaran","value":"Rp 5.000.000"}]'


def test_output_has_no_trailing_newline(make_record: RecordFactory) -> None:
    content = export_csv([make_record(id="a"), make_record(id="b")])

    assert not content.endswith("\n")
    assert content.count("\n") == 2


def test_empty_archive_cannot_be_exported() -> None:
    with pytest.raises(ExportFailure, match="No data to export"):
        export_archive(ArchiveStore(InMemoryKeyValueStore()))


def test_export_archive_names_file_after_the_day(make_record: RecordFactory) -> None:
    archive = ArchiveStore(InMemoryKeyValueStore())
    archive.append(make_record(id="old"))
    archive.append(make_record(id="new"))

    filename, content = export_archive(archive, today=date(2023, 10, 26))

    assert filename == "rekap_surat_2023-10-26.csv"
    assert content.split("\n")[1].startswith('"new"')
    assert export_filename(date(2024, 1, 5)) == "rekap_surat_2024-01-05.csv"
