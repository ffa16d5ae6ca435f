from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


class DocumentError(ValueError):
    """Invalid document operation (bad offsets, unsupported file type)."""


@dataclass(eq=False)
class Paragraph:
    """Text-bearing element of the document body."""

    text: str = ""
    # index of the paragraph in the file it was read from; None for new ones
    source_index: Optional[int] = None

    def insert_text(self, offset: int, text: str) -> None:
        if offset < 0 or offset > len(self.text):
            raise DocumentError(f"Offset {offset} is outside paragraph of length {len(self.text)}")
        self.text = self.text[:offset] + text + self.text[offset:]


@dataclass
class RangeElement:
    """One contiguous piece of a selection.

    A partial element covers ``element.text[start_offset:end_offset_inclusive + 1]``;
    a full element has no offsets and covers the whole element.
    """

    element: Paragraph
    start_offset: Optional[int] = None
    end_offset_inclusive: Optional[int] = None

    @property
    def is_partial(self) -> bool:
        return self.start_offset is not None and self.end_offset_inclusive is not None

    def text(self) -> str:
        if self.is_partial:
            return self.element.text[self.start_offset:self.end_offset_inclusive + 1]
        return self.element.text

    def end_offset(self) -> int:
        """Character position right after the covered text."""
        if self.is_partial:
            return self.end_offset_inclusive + 1
        return len(self.element.text)


@dataclass
class Selection:
    range_elements: List[RangeElement] = field(default_factory=list)


@dataclass
class Cursor:
    element: Paragraph
    offset: int


@dataclass
class Document:
    paragraphs: List[Paragraph] = field(default_factory=list)
    selection: Optional[Selection] = None
    cursor: Optional[Cursor] = None

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(paragraphs=[Paragraph(text=line, source_index=i) for i, line in enumerate(text.split("\n"))])

    def plain_text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)

    def append_paragraph(self, text: str) -> Paragraph:
        para = Paragraph(text=text)
        self.paragraphs.append(para)
        return para

    def _spans(self):
        # (paragraph, start, end) in plain-text coordinates; paragraphs are joined by "\n"
        pos = 0
        for para in self.paragraphs:
            yield para, pos, pos + len(para.text)
            pos += len(para.text) + 1

    def select(self, start: int, end: int) -> Selection:
        """Select plain-text range ``[start, end)`` and return the selection.

        Paragraphs covered completely become full range elements; paragraphs
        clipped by either boundary become partial ones.
        """
        total = len(self.plain_text())
        if start < 0 or end > total or start >= end:
            raise DocumentError(f"Invalid selection {start}:{end} for document of length {total}")

        elements: List[RangeElement] = []
        for para, p_start, p_end in self._spans():
            lo = max(start, p_start)
            hi = min(end, p_end)
            if lo >= hi:
                continue
            if lo == p_start and hi == p_end:
                elements.append(RangeElement(element=para))
            else:
                elements.append(RangeElement(element=para, start_offset=lo - p_start, end_offset_inclusive=hi - p_start - 1))

        if not elements:
            raise DocumentError(f"Selection {start}:{end} contains no text")
        self.selection = Selection(range_elements=elements)
        return self.selection

    def place_cursor(self, offset: int) -> Cursor:
        """Place the cursor at a plain-text offset and clear any selection."""
        for para, p_start, p_end in self._spans():
            if p_start <= offset <= p_end:
                self.cursor = Cursor(element=para, offset=offset - p_start)
                self.selection = None
                return self.cursor
        raise DocumentError(f"Cursor offset {offset} is outside the document")
