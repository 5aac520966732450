"""HTML loading and field extraction.

Pages are parsed with BeautifulSoup. Bytes are decoded as ISO-8859-1 so that
snapshots with stray non-UTF-8 sequences never fail to parse.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Script, Stylesheet, Tag

from pageindex.models import ExtractedFields, ExtractionResult, SkipReason

LOGGER = logging.getLogger(__name__)

SOURCE_ENCODING = "iso-8859-1"
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
# Elements that start a new line when rendered; inline tags join their text directly.
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
        "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
        "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)
SKIPPED_TAGS = frozenset({"script", "style", "template"})

_BOUNDARY = object()


def rendered_text(element: Tag) -> str:
    """Text of an element as a browser would lay it out, whitespace collapsed.

    Inline markup such as ``<b>W</b>elcome`` stays one word; block elements
    and ``<br>`` separate words.
    """
    parts: List[str] = []
    stack: list = list(reversed(element.contents))
    while stack:
        node = stack.pop()
        if node is _BOUNDARY:
            parts.append(" ")
        elif isinstance(node, Tag):
            if node.name in SKIPPED_TAGS:
                continue
            if node.name in BLOCK_TAGS:
                parts.append(" ")
                stack.append(_BOUNDARY)
            stack.extend(reversed(node.contents))
        elif isinstance(node, NavigableString) and not isinstance(
            node, (PreformattedString, Script, Stylesheet)
        ):
            parts.append(str(node))
    return " ".join("".join(parts).split())


def _joined_text(elements: Iterable[Tag]) -> str:
    """Concatenate the text of several elements, space separated."""
    parts = (rendered_text(element) for element in elements)
    return " ".join(part for part in parts if part)


def parse_html(markup: bytes | str) -> BeautifulSoup:
    if isinstance(markup, bytes):
        markup = markup.decode(SOURCE_ENCODING)
    return BeautifulSoup(markup, "html.parser")


def extract_from_soup(path: Path, soup: BeautifulSoup) -> ExtractionResult:
    """Pull the six indexed regions out of a parsed page."""
    title = soup.find("title")
    if title is None:
        LOGGER.debug("Skipping %s: no <title>", path)
        return ExtractionResult.skipped(path, SkipReason.MISSING_TITLE)

    body = soup.find("body")
    if body is None:
        LOGGER.debug("Skipping %s: no <body>", path)
        return ExtractionResult.skipped(path, SkipReason.MISSING_BODY)

    fields = ExtractedFields(
        path=path,
        headings=_joined_text(soup.find_all(HEADING_TAGS)),
        title=rendered_text(title),
        bold=_joined_text(soup.find_all("b")),
        italic=_joined_text(soup.find_all("i")),
        body=rendered_text(body),
        links=_joined_text(soup.find_all("a")),
    )
    return ExtractionResult.success(fields)


def extract_fields(path: Path) -> ExtractionResult:
    """Read and parse one page from disk."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        LOGGER.error("Could not open file %s: %s", path, exc)
        return ExtractionResult.skipped(path, SkipReason.READ_ERROR)

    return extract_from_soup(path, parse_html(raw))
