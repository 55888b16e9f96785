"""BeautifulSoup helpers for extracting content from HTML."""

from typing import Dict, List, Optional

import markdown
from bs4 import BeautifulSoup

INVISIBLE_TAGS = ("script", "style", "noscript", "template")

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def load(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def render_markdown(content: str) -> str:
    """Render Markdown to an HTML fragment."""
    return markdown.markdown(content, extensions=MARKDOWN_EXTENSIONS)


def drop_invisible(soup: BeautifulSoup) -> BeautifulSoup:
    for tag in soup.find_all(INVISIBLE_TAGS):
        if not tag.decomposed:
            tag.decompose()
    return soup


def body_text(soup: BeautifulSoup, separator: str = "") -> str:
    """Text of <body>, or of the whole document when there is none."""
    root = soup.body or soup
    return root.get_text(separator).strip()


def title(soup: BeautifulSoup) -> str:
    return soup.title.get_text() if soup.title else ""


def meta_description(soup: BeautifulSoup) -> str:
    tag = soup.find("meta", attrs={"name": "description"})
    if tag is None:
        return ""
    return tag.get("content") or ""


def links(soup: BeautifulSoup) -> List[Dict[str, Optional[str]]]:
    """Every anchor's text and href, in document order."""
    return [{"text": a.get_text(), "href": a.get("href")} for a in soup.find_all("a")]


def headings(soup: BeautifulSoup) -> List[Dict[str, object]]:
    """Every h1-h6 as (level, text), in document order."""
    return [
        {"level": int(tag.name[1]), "text": tag.get_text()}
        for tag in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"])
    ]
