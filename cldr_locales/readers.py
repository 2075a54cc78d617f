"""Readers for single values out of LDML element trees.

Every reader tolerates a missing element (``None`` parent or no match) and
skips elements marked ``alt="variant"``, CLDR's marker for non-canonical
alternate forms.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from lxml import etree

Element = etree._Element


def is_ignorable(char: str) -> bool:
    """Whether ``char`` is an identifier-ignorable code point.

    Covers the non-whitespace C0 and C1 controls and every format character
    (category ``Cf``), which includes the bidi marks CLDR puts around signs.
    """
    code = ord(char)
    if code <= 0x08 or 0x0E <= code <= 0x1B or 0x7F <= code <= 0x9F:
        return True
    return unicodedata.category(char) == "Cf"


def is_variant(element: Element) -> bool:
    return element.get("alt") == "variant"


def element_text(element: Element) -> str:
    return "".join(element.itertext())


def has_content(element: Element) -> bool:
    """Whether the element carries any non-whitespace text below it."""
    return any(text.strip() for text in element.itertext())


def first_child(parent: Element | None, tag: str) -> Element | None:
    """First direct child named ``tag`` that is not a variant."""
    if parent is None:
        return None
    for child in parent.iterchildren(tag):
        if not is_variant(child):
            return child
    return None


def symbol_char(parent: Element | None, tag: str) -> str | None:
    """First non-ignorable character of the ``tag`` child, if any."""
    element = first_child(parent, tag)
    if element is None:
        return None
    for char in element_text(element):
        if not is_ignorable(char):
            return char
    return None


def symbol_string(parent: Element | None, tag: str) -> str | None:
    element = first_child(parent, tag)
    if element is None:
        return None
    return element_text(element).strip()


def filtered_list(
    container: Element | None, width_tag: str, entry_tag: str, width: str
) -> list[str]:
    """Texts of ``entry_tag`` elements under the ``width_tag`` of type ``width``.

    Used for ``monthWidth/month`` and ``dayWidth/day``; the result keeps
    document order and is empty, not ``None``, when nothing matches.
    """
    if container is None:
        return []
    return [
        element_text(entry)
        for group in container.iterchildren(width_tag)
        if group.get("type") == width
        for entry in group.iter(entry_tag)
        if not is_variant(entry)
    ]


def typed_entry(elements: Iterable[Element], entry_type: str) -> str | None:
    """Text of the first non-variant element whose ``type`` is ``entry_type``."""
    for element in elements:
        if element.get("type") == entry_type and not is_variant(element):
            return element_text(element)
    return None
