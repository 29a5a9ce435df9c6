"""Prompt templates and the response schema for letter extraction."""

from __future__ import annotations

from textwrap import dedent
from typing import Any

from surat_ai.core.models import LetterType

MEDIA_PROMPT = dedent(
    """
    Anda adalah asisten administrasi ahli. Tugas anda adalah menganalisis dokumen surat resmi ini dan mengekstrak informasi penting secara detail.

    Instruksi Ekstraksi:
    1.  **Metadata Surat**:
        - Jenis Surat: 'Masuk' atau 'Keluar'.
        - Nomor Surat, Pengirim, Penerima (Ditujukan Kepada), Tanggal Surat (YYYY-MM-DD), Perihal.

    2.  **Detail Acara (Sangat Penting)**:
        - Cari tanggal dan jam mulai acara. Format ke ISO String (YYYY-MM-DDTHH:mm).
        - Cari tanggal dan jam selesai acara.
        - **ATURAN 4 JAM**: Jika jam selesai tidak tertulis secara eksplisit, ESTIMASIKAN waktu selesai adalah 4 jam setelah waktu mulai.
        - **Tempat**: Ambil nama lokasi. Jika Online/Zoom, WAJIB sertakan Link, Meeting ID, dan Passcode dalam field lokasi ini.

    3.  **Ringkasan**:
        - Buat ringkasan padat yang mencakup poin-poin penting selain waktu acara (karena waktu sudah ada field khususnya).

    4.  **Tags**: Berikan tag relevan.

    Kembalikan respons dalam format JSON.
    """
).strip()


_TEXT_PROMPT_TEMPLATE = dedent(
    """
    Analisis teks surat berikut.
    Teks: "{text}"

    Instruksi:
    1. Ekstrak Jenis, Nomor, Pengirim, Penerima, Tanggal, Perihal.
    2. Ekstrak Waktu Acara (Start/End). Jika End tidak ada, tambahkan 4 jam dari Start. Format ISO YYYY-MM-DDTHH:mm.
    3. Ekstrak Tempat (Termasuk detail Zoom jika ada).
    4. Buat Ringkasan dan Tags.
    """
).strip()


def build_text_prompt(text: str) -> str:
    """Compose the extraction prompt for pasted letter text."""
    return _TEXT_PROMPT_TEMPLATE.format(text=text)


_DATETIME_HINT = "ISO 8601 DateTime YYYY-MM-DDTHH:mm"

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "type": {"type": "STRING", "enum": [member.value for member in LetterType]},
        "referenceNumber": {"type": "STRING"},
        "sender": {"type": "STRING"},
        "recipient": {"type": "STRING"},
        "date": {"type": "STRING"},
        "subject": {"type": "STRING"},
        "eventStart": {"type": "STRING", "description": _DATETIME_HINT},
        "eventEnd": {"type": "STRING", "description": _DATETIME_HINT},
        "location": {
            "type": "STRING",
            "description": "Nama tempat atau Detail Zoom (Link, ID, Pass)",
        },
        "summary": {"type": "STRING"},
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "type",
        "referenceNumber",
        "sender",
        "recipient",
        "date",
        "subject",
        "summary",
        "tags",
    ],
}

SAFETY_SETTINGS: list[dict[str, str]] = [
    {"category": category, "threshold": "BLOCK_NONE"}
    for category in (
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


__all__ = ["MEDIA_PROMPT", "RESPONSE_SCHEMA", "SAFETY_SETTINGS", "build_text_prompt"]
