"""CLDR document loaders for supplemental data and the locale corpus."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from tqdm import tqdm

from .builders import build_locale_descriptor
from .io import parse_xml, read_lines
from .models import Calendar, LocaleDescriptor, NumberingSystem
from .readers import Element

COMMON_DIR = "common"
MAIN_DIR = "main"
SUPPLEMENTAL_DIR = "supplemental"
SUPPLEMENTAL_DATA_FILE = "supplementalData.xml"
NUMBERING_SYSTEMS_FILE = "numberingSystems.xml"


def main_dir(cldr_root: Path) -> Path:
    return cldr_root / COMMON_DIR / MAIN_DIR


def supplemental_path(cldr_root: Path, name: str) -> Path:
    return cldr_root / COMMON_DIR / SUPPLEMENTAL_DIR / name


def parse_numbering_systems(document: Element) -> tuple[NumberingSystem, ...]:
    """Numeric (non-algorithmic) systems, first declaration of an id wins."""
    systems: dict[str, NumberingSystem] = {}
    for element in document.iter("numberingSystem"):
        if element.get("type") != "numeric":
            continue
        system_id = element.get("id")
        if not system_id or system_id in systems:
            continue
        systems[system_id] = NumberingSystem(
            id=system_id, digits=tuple(element.get("digits", ""))
        )
    return tuple(systems.values())


def parse_calendars(document: Element) -> tuple[Calendar, ...]:
    calendars: dict[str, Calendar] = {}
    for data in document.iter("calendarData"):
        for element in data.iter("calendar"):
            calendar_id = element.get("type")
            if calendar_id and calendar_id not in calendars:
                calendars[calendar_id] = Calendar(id=calendar_id)
    return tuple(calendars.values())


def parse_territory_codes(document: Element) -> dict[str, str]:
    """Two-letter territory code to its ISO 3166 alpha-3 code."""
    codes: dict[str, str] = {}
    for mappings in document.iterchildren("codeMappings"):
        for element in mappings.iterchildren("territoryCodes"):
            alpha2 = element.get("type")
            alpha3 = element.get("alpha3")
            if alpha2 and alpha3:
                codes[alpha2] = alpha3
    return codes


def parse_parent_locales(document: Element) -> dict[str, tuple[str, ...]]:
    """Explicit parent bundle name to the bundle names it parents.

    Only the general ``parentLocales`` block is read; blocks scoped to a
    ``component`` (collations, segmentations, ...) do not affect item lookup.
    """
    parents: dict[str, list[str]] = {}
    for block in document.iter("parentLocales"):
        if block.get("component"):
            continue
        for element in block.iterchildren("parentLocale"):
            parent = element.get("parent")
            if not parent:
                continue
            parents.setdefault(parent, []).extend(element.get("locales", "").split())
    return {parent: tuple(children) for parent, children in parents.items()}


def parse_iso639_2(lines: Iterable[str]) -> dict[str, str]:
    """ISO 639-1 code to its ISO 639-2 code.

    Rows are ``bibliographic|terminology|alpha2|english|french``; the
    terminology code is preferred when a language has both.
    """
    codes: dict[str, str] = {}
    for line in lines:
        fields = line.strip().split("|")
        if len(fields) != 5:
            continue
        bibliographic, terminology, alpha2 = fields[:3]
        if alpha2:
            codes[alpha2] = terminology or bibliographic
    return codes


def load_numbering_systems(cldr_root: Path) -> tuple[NumberingSystem, ...]:
    """Load and parse numberingSystems.xml."""
    return parse_numbering_systems(
        parse_xml(supplemental_path(cldr_root, NUMBERING_SYSTEMS_FILE))
    )


def load_supplemental_data(cldr_root: Path) -> Element:
    """Load supplementalData.xml (calendars, code mappings, parent locales)."""
    return parse_xml(supplemental_path(cldr_root, SUPPLEMENTAL_DATA_FILE))


def load_iso639_2(path: Path) -> dict[str, str]:
    """Load the Library of Congress ISO-639-2 pipe-delimited list."""
    return parse_iso639_2(read_lines(path))


def load_locale_descriptors(
    cldr_root: Path,
    systems: Mapping[str, NumberingSystem],
    *,
    progress: bool = True,
) -> list[LocaleDescriptor]:
    """Build a descriptor for every ``common/main/*.xml`` file, sorted by name."""
    files = sorted(main_dir(cldr_root).glob("*.xml"))
    return [
        build_locale_descriptor(path.stem, parse_xml(path), systems)
        for path in tqdm(files, desc="Reading locales", unit="locale", disable=not progress)
    ]
