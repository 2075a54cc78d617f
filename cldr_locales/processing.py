"""Assemble the resolved locale model from CLDR data."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from .builders import latin_system
from .errors import LocaleDataError
from .inheritance import ancestors, resolve_parents
from .loaders import (
    load_iso639_2,
    load_locale_descriptors,
    load_numbering_systems,
    load_supplemental_data,
    parse_calendars,
    parse_parent_locales,
    parse_territory_codes,
)
from .models import (
    Calendar,
    LocaleDescriptor,
    LocaleIdentity,
    LocaleMetadata,
    LocaleModel,
    NumberingSystem,
)


def numbering_system_table(
    systems: Iterable[NumberingSystem],
) -> Mapping[str, NumberingSystem]:
    """Read-only id -> system table; the first system declared with an id wins."""
    table: dict[str, NumberingSystem] = {}
    for system in systems:
        table.setdefault(system.id, system)
    return MappingProxyType(table)


def check_numbering_systems(
    descriptors: Iterable[LocaleDescriptor], table: Mapping[str, NumberingSystem]
) -> None:
    """Every numbering system a locale refers to must be the one in the table."""
    for descriptor in descriptors:
        referenced = [descriptor.default_numbering_system]
        for symbols in descriptor.number_symbols.values():
            referenced.extend((symbols.system, symbols.alias_of))
        for system in referenced:
            if system is not None and table.get(system.id) != system:
                raise LocaleDataError(
                    f"Locale '{descriptor.bundle_name}' refers to unknown "
                    f"numbering system '{system.id}'."
                )


def build_metadata(
    descriptors: Iterable[LocaleDescriptor],
    territory_codes: Mapping[str, str],
    iso639_2: Mapping[str, str],
) -> LocaleMetadata:
    """Sorted ISO code lists of the corpus and their three-letter mappings."""
    identities = [descriptor.identity for descriptor in descriptors]
    countries = sorted(
        {
            identity.territory
            for identity in identities
            if identity.territory and len(identity.territory) == 2
        }
    )
    languages = sorted(
        {identity.language for identity in identities if len(identity.language) == 2}
    )
    scripts = sorted({identity.script for identity in identities if identity.script})
    return LocaleMetadata(
        iso_countries=tuple(countries),
        iso_languages=tuple(languages),
        scripts=tuple(scripts),
        iso3_countries=dict(sorted(territory_codes.items())),
        iso3_languages={
            language: iso639_2[language] for language in languages if language in iso639_2
        },
    )


def assemble_model(
    numbering_systems: Mapping[str, NumberingSystem],
    calendars: Iterable[Calendar],
    descriptors: Iterable[LocaleDescriptor],
    parent_locales: Mapping[str, Iterable[str]],
    territory_codes: Mapping[str, str],
    iso639_2: Mapping[str, str],
) -> LocaleModel:
    """Resolve inheritance and gather the tables the writers need.

    Locales come out parents first, siblings ordered by canonical key, so the
    result is the same for the same input regardless of file order.

    Args:
        numbering_systems: The shared id -> system table, see
            ``numbering_system_table``.
    """
    latin_system(numbering_systems)
    descriptors = list(descriptors)
    check_numbering_systems(descriptors, numbering_systems)

    resolved, depths = resolve_parents(descriptors, parent_locales)
    ordered = sorted(
        resolved, key=lambda locale: (depths[locale.canonical_key], locale.canonical_key)
    )
    return LocaleModel(
        numbering_systems=tuple(numbering_systems.values()),
        calendars=tuple(calendars),
        metadata=build_metadata(descriptors, territory_codes, iso639_2),
        locales=tuple(ordered),
    )


def select_locales(model: LocaleModel, tags: Iterable[str]) -> LocaleModel:
    """Restrict ``model`` to the given locales and all of their ancestors."""
    parents = model.parents()
    selected: set[str] = set()
    for tag in tags:
        key = tag if tag in parents else LocaleIdentity.parse(tag).canonical_key
        if key not in parents:
            raise LocaleDataError(f"Unknown locale '{tag}'.")
        selected.add(key)
        selected.update(ancestors(key, parents))
    return model.model_copy(
        update={
            "locales": tuple(
                locale for locale in model.locales if locale.canonical_key in selected
            )
        }
    )


def collect_model(
    cldr_root: Path, iso639_2_path: Path, *, progress: bool = True
) -> LocaleModel:
    """Run the whole pipeline over an extracted CLDR tree.

    Args:
        cldr_root: Directory containing CLDR's ``common/`` tree.
        iso639_2_path: Path to the ISO-639-2 pipe-delimited code list.
        progress: Show a progress bar while reading locale files.
    """
    table = numbering_system_table(load_numbering_systems(cldr_root))
    supplemental = load_supplemental_data(cldr_root)
    descriptors = load_locale_descriptors(cldr_root, table, progress=progress)
    return assemble_model(
        table,
        parse_calendars(supplemental),
        descriptors,
        parse_parent_locales(supplemental),
        parse_territory_codes(supplemental),
        load_iso639_2(iso639_2_path),
    )
