"""Fatal conditions raised while building the locale model."""

from __future__ import annotations

from collections.abc import Iterable


class LocaleDataError(ValueError):
    """Raised when CLDR data cannot be turned into a consistent locale model."""


class MissingIdentityError(LocaleDataError):
    """Raised when a locale file has no language subtag."""

    def __init__(self, bundle_name: str) -> None:
        super().__init__(f"Locale '{bundle_name}' has no language in its identity block.")
        self.bundle_name = bundle_name


class MalformedPatternError(LocaleDataError):
    """Raised for a date/time format length other than full, long, medium or short."""

    def __init__(self, bundle_name: str, kind: str) -> None:
        super().__init__(f"Unknown format '{kind}' in locale '{bundle_name}', abort.")
        self.bundle_name = bundle_name
        self.kind = kind


class InheritanceError(LocaleDataError):
    """Raised when the locale inheritance graph is not a single tree."""


class UnresolvedParentError(InheritanceError):
    """Raised when no parent can be found for a locale."""

    def __init__(self, key: str, parent: str | None = None) -> None:
        if parent is None:
            message = f"Cannot resolve the parent of locale '{key}'."
        else:
            message = f"Parent '{parent}' of locale '{key}' is not part of the corpus."
        super().__init__(message)
        self.key = key
        self.parent = parent


class AmbiguousParentError(InheritanceError):
    """Raised when parentLocales declares two parents for the same locale."""

    def __init__(self, bundle_name: str, parents: Iterable[str]) -> None:
        self.parents = tuple(sorted(parents))
        super().__init__(
            f"Locale '{bundle_name}' is declared under several parents: {', '.join(self.parents)}."
        )
        self.bundle_name = bundle_name


class InheritanceCycleError(InheritanceError):
    """Raised when following parents from a locale comes back to it."""

    def __init__(self, chain: Iterable[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Locale inheritance cycle: {' -> '.join(self.chain)}.")


class MissingRootError(InheritanceError):
    """Raised when the corpus does not have exactly one root locale."""

    def __init__(self, roots: Iterable[str]) -> None:
        self.roots = tuple(roots)
        found = ", ".join(self.roots) or "none"
        super().__init__(f"Expected exactly one root locale, found: {found}.")


class DuplicateLocaleError(InheritanceError):
    """Raised when two locale files produce the same canonical key."""

    def __init__(self, key: str, bundle_names: Iterable[str]) -> None:
        self.bundle_names = tuple(bundle_names)
        super().__init__(
            f"Locale key '{key}' is produced by several files: {', '.join(self.bundle_names)}."
        )
        self.key = key
