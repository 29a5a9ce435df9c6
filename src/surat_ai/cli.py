"""Command-line entry point for Surat AI."""

from __future__ import annotations

import argparse
import asyncio
import mimetypes
from pathlib import Path

from surat_ai.core import AppSettings, configure_logging, load_app_settings
from surat_ai.core.interfaces import (
    EmptyResponse,
    ExportFailure,
    ServiceError,
    SizeLimitExceeded,
    StorageError,
    ValidationError,
)
from surat_ai.core.models import LetterRecord, LetterType
from surat_ai.export import export_archive
from surat_ai.ingestion import IntakeSession, LetterIntake
from surat_ai.intelligence import ExtractionAdapter, GeminiClient
from surat_ai.storage import ArchiveStore, PreferencesStore, SqliteKeyValueStore

_TYPE_CHOICES = {
    "all": None,
    "incoming": LetterType.INCOMING,
    "outgoing": LetterType.OUTGOING,
}


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Surat AI letter intake assistant")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("info", help="Show configuration and archive totals.")

    analyze = subparsers.add_parser(
        "analyze", help="Extract letter metadata from a document or text."
    )
    analyze.add_argument("file", nargs="?", type=Path, help="Image or PDF to analyse.")
    analyze.add_argument("--text", default=None, help="Letter text to analyse.")
    analyze.add_argument(
        "--save",
        action="store_true",
        help="Archive the extracted letter without further edits.",
    )

    listing = subparsers.add_parser("list", help="List archived letters.")
    listing.add_argument("--type", choices=sorted(_TYPE_CHOICES), default="all")
    listing.add_argument("--search", default="", help="Filter by a search term.")

    export = subparsers.add_parser("export", help="Export the archive to CSV.")
    export.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Target directory or file (default: rekap_surat_<date>.csv).",
    )

    subparsers.add_parser("clear", help="Delete every archived letter.")
    return parser


def execute(args: argparse.Namespace, settings: AppSettings) -> int:
    """Execute the requested CLI command and return an exit status."""
    command = args.command or "info"
    with SqliteKeyValueStore(settings.storage) as store:
        archive = ArchiveStore(store)
        preferences = PreferencesStore(store)
        try:
            if command == "info":
                _run_info(settings, archive)
            elif command == "analyze":
                return _run_analyze(args, settings, archive, preferences)
            elif command == "list":
                _run_list(archive, _TYPE_CHOICES[args.type], args.search)
            elif command == "export":
                return _run_export(archive, args.output)
            elif command == "clear":
                archive.clear()
                print("Archive cleared.")
        except StorageError as exc:
            print(f"Storage error: {exc}")
            return 1
    return 0


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    settings = load_app_settings(env_file=args.env_file)
    configure_logging(settings.logging)
    raise SystemExit(execute(args, settings))


def _run_info(settings: AppSettings, archive: ArchiveStore) -> None:
    counts = archive.counts()
    print("Surat AI is ready. Configure the Gemini API key to analyse letters.")
    print(f"Model: {settings.gemini.model}")
    print(f"Database path: {settings.storage.db_path}")
    print(
        f"Archive: {counts.total} letter(s) "
        f"({counts.incoming} incoming, {counts.outgoing} outgoing)"
    )


def _run_analyze(
    args: argparse.Namespace,
    settings: AppSettings,
    archive: ArchiveStore,
    preferences: PreferencesStore,
) -> int:
    """Analyse a document or text and optionally archive the result."""
    if args.file is None and not args.text:
        print("Please provide a document or text first.")
        return 2

    extractor = ExtractionAdapter(
        GeminiClient(settings.gemini),
        max_media_bytes=settings.intake.max_upload_bytes,
    )
    intake = LetterIntake(extractor, archive, preferences)
    try:
        session = asyncio.run(_analyze(intake, args.file, args.text))
    except SizeLimitExceeded as exc:
        print(str(exc))
        return 1
    except EmptyResponse as exc:
        print(f"No result: {exc}")
        return 1
    except ServiceError as exc:
        hint = " The file may be too large or unsupported." if exc.size_related else ""
        print(f"Analysis failed: {exc}.{hint}")
        return 1

    draft = session.draft
    print(f"Type:       {draft.type.value}")
    print(f"Reference:  {draft.reference_number}")
    print(f"Sender:     {draft.sender}")
    print(f"Recipient:  {draft.recipient}")
    print(f"Date:       {draft.date}")
    print(f"Subject:    {draft.subject}")
    if draft.event_start:
        print(f"Event:      {draft.event_start} - {draft.event_end or '?'}")
    if draft.location:
        print(f"Location:   {draft.location}")
    print(f"Tags:       {', '.join(draft.tags)}")
    print(f"Summary:    {draft.summary}")

    if args.save:
        try:
            record = intake.save(draft, session.source)
        except ValidationError as exc:
            print(f"Not saved: {exc}")
            return 1
        print(f"Saved as {record.file_name} ({record.id})")
    return 0


async def _analyze(
    intake: LetterIntake, file: Path | None, text: str | None
) -> IntakeSession:
    if file is not None:
        data = file.read_bytes()
        mime_type = mimetypes.guess_type(file.name)[0] or "application/pdf"
        return await intake.analyze_document(data, mime_type, filename=file.name)
    return await intake.analyze_text(text or "")


def _run_list(
    archive: ArchiveStore, letter_type: LetterType | None, term: str
) -> None:
    records = archive.search(letter_type, term)
    if not records:
        print("No letters found.")
        return

    print(f"Showing {len(records)} letter(s):")
    header = f"{'Date':<10}  {'Type':<6}  {'Reference':<20}  {'Sender':<24}  Subject"
    print(header)
    print("-" * len(header))
    for record in records:
        print(_format_row(record))


def _format_row(record: LetterRecord) -> str:
    return (
        f"{record.date:<10}  {record.type.value:<6}  "
        f"{record.reference_number[:20]:<20}  {record.sender[:24]:<24}  "
        f"{record.subject}"
    )


def _run_export(archive: ArchiveStore, output: Path | None) -> int:
    try:
        filename, content = export_archive(archive)
    except ExportFailure as exc:
        print(f"Export failed: {exc}")
        return 1
    target = Path(filename)
    if output is not None:
        target = output / filename if output.is_dir() else output
    target.write_text(content, encoding="utf-8")
    print(f"Exported archive to {target}")
    return 0


if __name__ == "__main__":
    main()
