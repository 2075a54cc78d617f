"""Parent resolution for CLDR locales.

A locale's parent is the explicit ``parentLocales`` declaration when there is
one, otherwise its bundle name with the last subtag removed, and finally the
root locale (https://www.unicode.org/reports/tr35/#Locale_Inheritance).
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Set

from .errors import (
    AmbiguousParentError,
    DuplicateLocaleError,
    InheritanceCycleError,
    MissingRootError,
    UnresolvedParentError,
)
from .models import KEY_SEPARATOR, ROOT_KEY, LocaleDescriptor, ResolvedLocale


def index_parent_locales(parent_locales: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """Invert ``parent -> children`` into ``child -> parent``.

    Raises:
        AmbiguousParentError: If a child is declared under two different parents.
    """
    index: dict[str, str] = {}
    for parent, children in parent_locales.items():
        for child in children:
            existing = index.setdefault(child, parent)
            if existing != parent:
                raise AmbiguousParentError(child, (existing, parent))
    return index


def find_parent(
    descriptor: LocaleDescriptor,
    known_keys: Set[str],
    overrides: Mapping[str, str],
) -> str | None:
    """Canonical key of the parent of ``descriptor``, ``None`` for the root.

    Args:
        descriptor: The locale to resolve.
        known_keys: Canonical keys of every locale in the corpus.
        overrides: Inverted parentLocales table, see ``index_parent_locales``.

    Raises:
        UnresolvedParentError: If dropping the last subtag leaves several
            subtags that do not name a known locale.
    """
    override = overrides.get(descriptor.bundle_name)
    if override is not None:
        return override

    subtags = descriptor.identity.subtags()
    if KEY_SEPARATOR.join(subtags) == ROOT_KEY:
        return None
    if len(subtags) == 1:
        return ROOT_KEY

    candidate = subtags[:-1]
    candidate_key = KEY_SEPARATOR.join(candidate)
    if candidate_key in known_keys:
        return candidate_key
    if len(candidate) == 1:
        return ROOT_KEY
    raise UnresolvedParentError(descriptor.canonical_key)


def ancestors(key: str, parents: Mapping[str, str | None]) -> tuple[str, ...]:
    """Keys from the parent of ``key`` up to the root, nearest first."""
    chain: list[str] = []
    seen = {key}
    current = parents[key]
    while current is not None:
        if current in seen:
            raise InheritanceCycleError([key, *chain, current])
        if current not in parents:
            raise UnresolvedParentError(chain[-1] if chain else key, current)
        seen.add(current)
        chain.append(current)
        current = parents[current]
    return tuple(chain)


def verify_tree(resolved: Iterable[ResolvedLocale]) -> dict[str, int]:
    """Check that the parent links form one tree rooted at ``root``.

    Returns:
        The depth (number of hops to the root) of every locale.

    Raises:
        MissingRootError: If the root is absent or another locale has no parent.
        UnresolvedParentError: If a parent is not part of the corpus.
        InheritanceCycleError: If parent links loop.
    """
    parents = {locale.canonical_key: locale.parent for locale in resolved}
    roots = sorted(key for key, parent in parents.items() if parent is None)
    if roots != [ROOT_KEY]:
        raise MissingRootError(roots)
    return {key: len(ancestors(key, parents)) for key in parents}


def resolve_parents(
    descriptors: Iterable[LocaleDescriptor],
    parent_locales: Mapping[str, Iterable[str]],
) -> tuple[tuple[ResolvedLocale, ...], dict[str, int]]:
    """Resolve the parent of every locale and verify the resulting tree.

    Returns:
        The resolved locales in input order and the depth of every locale,
        as computed by ``verify_tree``.
    """
    descriptors = list(descriptors)

    bundles_by_key: dict[str, list[str]] = defaultdict(list)
    for descriptor in descriptors:
        bundles_by_key[descriptor.canonical_key].append(descriptor.bundle_name)
    for key, bundle_names in bundles_by_key.items():
        if len(bundle_names) > 1:
            raise DuplicateLocaleError(key, bundle_names)

    overrides = index_parent_locales(parent_locales)
    known_keys = frozenset(bundles_by_key)
    resolved = tuple(
        ResolvedLocale(
            descriptor=descriptor,
            parent=find_parent(descriptor, known_keys, overrides),
        )
        for descriptor in descriptors
    )
    return resolved, verify_tree(resolved)
