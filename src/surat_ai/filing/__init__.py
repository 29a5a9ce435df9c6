"""Normalization and filing rules applied to reviewed letters."""

from .abbreviations import lookup_short_name, normalize_sender
from .assembler import apply_extraction, assemble_record
from .event_time import resolve_event_window
from .filenames import extension_of, synthesize_filename

__all__ = [
    "apply_extraction",
    "assemble_record",
    "extension_of",
    "lookup_short_name",
    "normalize_sender",
    "resolve_event_window",
    "synthesize_filename",
]
