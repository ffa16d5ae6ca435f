"""Bridge between the document selection and plain strings."""

from __future__ import annotations

import enum
import logging

from .model import Document

logger = logging.getLogger(__name__)

SELECTION_SEPARATOR = " "
INSERT_SEPARATOR = "\n\n"


class NoSelectionError(Exception):
    def __init__(self, message: str = "Please select some text first.") -> None:
        super().__init__(message)


class InsertPosition(enum.Enum):
    AFTER_SELECTION = "after-selection"
    AT_CURSOR = "at-cursor"
    APPEND = "append"


def read_selection(doc: Document) -> str:
    """Return the selected text, range elements joined by a single space.

    Raises NoSelectionError when the document has no selection.
    """
    if doc.selection is None or not doc.selection.range_elements:
        raise NoSelectionError()
    return SELECTION_SEPARATOR.join(el.text() for el in doc.selection.range_elements)


def insert_text(doc: Document, text: str) -> InsertPosition:
    """Insert text after the selection, else at the cursor, else at the end.

    After a selection the text is separated from it by a blank line.
    """
    if doc.selection is not None and doc.selection.range_elements:
        last = doc.selection.range_elements[-1]
        offset = last.end_offset()
        last.element.insert_text(offset, INSERT_SEPARATOR + text)
        logger.debug("Inserted %d chars after selection at offset %d", len(text), offset)
        return InsertPosition.AFTER_SELECTION

    if doc.cursor is not None:
        doc.cursor.element.insert_text(doc.cursor.offset, text)
        logger.debug("Inserted %d chars at cursor offset %d", len(text), doc.cursor.offset)
        return InsertPosition.AT_CURSOR

    doc.append_paragraph(text)
    logger.debug("Appended %d chars as a new paragraph", len(text))
    return InsertPosition.APPEND
