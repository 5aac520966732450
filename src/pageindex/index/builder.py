"""Assembly of index documents from extracted page fields."""

from __future__ import annotations

from typing import List, Mapping

from pageindex.models import ExtractedFields, IndexDocument
from pageindex.utils.text import tokenize


def build_document(
    fields: ExtractedFields,
    url_map: Mapping[str, str],
    dir_name: str,
    file_name: str,
) -> IndexDocument:
    """Combine the page regions into one document.

    The token bag holds headings, title, bold, italic, body and link tokens in
    that order, so words appearing in several regions are counted once per
    region. A page missing from ``url_map`` still gets a document, with no url.
    """
    tokens: List[str] = []
    for span in fields.spans():
        tokens.extend(tokenize(span))

    return IndexDocument(
        url=url_map.get(f"{dir_name}/{file_name}"),
        title=tokenize(fields.title),
        tokens=tokens,
    )
