"""Text helpers shared by the page grammars."""

import re

from bs4 import BeautifulSoup, Tag

_WHITESPACE_RE = re.compile(r"\s+")
_LONE_DASHES = frozenset({"-", "\u2012", "\u2013", "\u2014"})


def collapse(text: str) -> str:
    """Turn non-breaking spaces into spaces, collapse runs, trim."""
    return _WHITESPACE_RE.sub(" ", text.replace("\xa0", " ")).strip()


def cell_text(tag: Tag | None) -> str:
    """Visible text of an element: tags stripped, entities decoded, whitespace collapsed."""
    if tag is None:
        return ""
    return collapse(tag.get_text(" "))


def clean_text(fragment: str) -> str:
    """Same cleanup as cell_text for a raw HTML fragment ("Caf&eacute;&nbsp;<b>1919</b>")."""
    return cell_text(BeautifulSoup(fragment, "html.parser"))


def is_lone_dash(text: str) -> bool:
    """Calendar widgets print a bare dash for "no hours"."""
    return text in _LONE_DASHES


def direct_cells(row: Tag) -> list[Tag]:
    """The row's own td/th cells, ignoring cells of nested tables."""
    return row.find_all(["td", "th"], recursive=False)
