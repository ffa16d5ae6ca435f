"""Host document layer.

Exposes:
- Data model: Document, Paragraph, Selection, RangeElement, Cursor
- Selection adapter: read_selection, insert_text
- Readers/writers: txt, docx (see load_document / save_document)
"""

from __future__ import annotations

import os

from .model import Cursor, Document, DocumentError, Paragraph, RangeElement, Selection
from .selection import InsertPosition, NoSelectionError, insert_text, read_selection


def _detect_type(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext in (".txt", ".md"):
        return "txt"
    if ext in (".docx",):
        return "docx"
    return "unknown"


def load_document(path: str) -> Document:
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    doc_type = _detect_type(path)
    if doc_type == "txt":
        from .txt import read_txt
        return read_txt(path)
    if doc_type == "docx":
        from .docx_io import read_docx
        return read_docx(path)
    raise DocumentError(f"Unsupported file type: {path}")


def save_document(doc: Document, out_path: str, src_path: str | None = None) -> str:
    doc_type = _detect_type(out_path)
    if doc_type == "txt":
        from .txt import write_txt
        return write_txt(doc, out_path)
    if doc_type == "docx":
        from .docx_io import write_docx
        base = src_path if src_path and _detect_type(src_path) == "docx" else None
        return write_docx(doc, out_path, src_path=base)
    raise DocumentError(f"Unsupported file type: {out_path}")


__all__ = [
    "Cursor",
    "Document",
    "DocumentError",
    "InsertPosition",
    "NoSelectionError",
    "Paragraph",
    "RangeElement",
    "Selection",
    "insert_text",
    "load_document",
    "read_selection",
    "save_document",
]
