from __future__ import annotations

from typing import Optional

from docx import Document as DocxDocument

from .model import Document, Paragraph


def read_docx(path: str) -> Document:
    """Read body paragraphs of a DOCX file into the document model.

    Line breaks inside a paragraph come through as "\\n" in its text.
    """
    docx = DocxDocument(path)
    paragraphs = [Paragraph(text=para.text, source_index=i) for i, para in enumerate(docx.paragraphs)]
    return Document(paragraphs=paragraphs)


def write_docx(doc: Document, out_path: str, src_path: Optional[str] = None) -> str:
    """Write the document to DOCX.

    When ``src_path`` is given the source file is used as the base: unchanged
    paragraphs keep their formatting, edited ones are rewritten as a single run
    and new paragraphs are appended at the end of the body.
    """
    d = DocxDocument(src_path) if src_path else DocxDocument()
    existing = d.paragraphs if src_path else []
    for para in doc.paragraphs:
        if para.source_index is not None and para.source_index < len(existing):
            target = existing[para.source_index]
            if target.text != para.text:
                target.text = para.text
        else:
            d.add_paragraph(para.text)
    d.save(out_path)
    return out_path
