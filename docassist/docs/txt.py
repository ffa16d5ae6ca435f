from __future__ import annotations

from .model import Document


def read_txt(path: str) -> Document:
    # one paragraph per line so plain-text offsets match the file contents
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    if content.endswith("\n"):
        content = content[:-1]
    return Document.from_text(content)


def write_txt(doc: Document, out_path: str) -> str:
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(doc.plain_text())
        f.write("\n")
    return out_path
