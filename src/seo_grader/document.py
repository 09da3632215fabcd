"""Read-only query layer over a parsed HTML document."""

import re
from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    CData,
    NavigableString,
    RubyParenthesisString,
    RubyTextString,
    Script,
    Stylesheet,
    TemplateString,
)

_WHITESPACE_RUN = re.compile(r"\s+")

# Every string kind that contributes to an element's text content.
# Comments, doctypes and processing instructions are left out.
TEXT_STRING_TYPES = (
    NavigableString,
    CData,
    Script,
    Stylesheet,
    TemplateString,
    RubyTextString,
    RubyParenthesisString,
)

TextTarget = Union[str, Tag, Iterable[Tag]]


class Document:
    """A queryable HTML tree built once from raw markup.

    Parsing is lenient: malformed or partial markup is repaired by the lxml
    tree builder and never raises. Nothing here knows about SEO rules.
    """

    def __init__(self, markup: str):
        self._markup = markup or ""
        self._soup = BeautifulSoup(self._markup, "lxml")

    @property
    def markup(self) -> str:
        """The raw markup the document was built from."""
        return self._markup

    def starts_with(self, token: str) -> bool:
        """Case-insensitively check whether the markup begins with `token`.

        Leading whitespace is ignored.
        """
        return self._markup.lstrip().lower().startswith(token.lower())

    def query(self, selector: str) -> list[Tag]:
        """Return all elements matching a CSS selector in document order."""
        return self._soup.select(selector)

    def first(self, selector: str) -> Optional[Tag]:
        """Return the first element matching `selector`, if any."""
        return self._soup.select_one(selector)

    def text(self, target: TextTarget) -> str:
        """Concatenated, whitespace-collapsed text of the targeted elements.

        Args:
            target: A CSS selector, a single element, or a sequence of elements

        Returns:
            Text of every matched element joined by single spaces and trimmed.
            Inline script, style and template contents are included.
        """
        if isinstance(target, str):
            elements = self.query(target)
        elif isinstance(target, Tag):
            elements = [target]
        else:
            elements = list(target)

        raw = " ".join(element.get_text(types=TEXT_STRING_TYPES) for element in elements)
        return _WHITESPACE_RUN.sub(" ", raw).strip()

    @staticmethod
    def attribute(element: Tag, name: str) -> Optional[str]:
        """Return an attribute value, or None when it is absent.

        Multi-valued attributes (class, rel, ...) are joined with spaces.
        """
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value
