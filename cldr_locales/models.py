"""Pydantic models for CLDR locale records and the resolved locale graph."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer, model_validator

ROOT_KEY = "root"
KEY_SEPARATOR = "_"
LATN = "latn"

PATTERN_RANKS: dict[str, int] = {"full": 0, "long": 1, "medium": 2, "short": 3}

Symbol = Annotated[str, Field(min_length=1, max_length=1)]


def _read_only(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


def _as_dict(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return dict(mapping)


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


# Read-only after validation, dumped as a plain dict.
CodeMap = Annotated[
    Mapping[str, str], AfterValidator(_read_only), PlainSerializer(_as_dict)
]


class NumberingSystem(BaseModel, frozen=True):
    """A named set of ten decimal digit glyphs (numberingSystems.xml)."""

    id: str = Field(min_length=1)
    digits: tuple[str, ...] = Field(min_length=10, max_length=10)


class NumberSymbols(BaseModel, frozen=True):
    """Number formatting symbols of one numbering system in one locale.

    Every optional field left as ``None`` was not present in the locale file
    and is inherited from the parent locale at lookup time.
    """

    system: NumberingSystem
    alias_of: NumberingSystem | None = None
    decimal: Symbol | None = None
    group: Symbol | None = None
    list_separator: Symbol | None = None
    percent: Symbol | None = None
    plus: Symbol | None = None
    minus: Symbol | None = None
    per_mille: Symbol | None = None
    infinity: str | None = None
    nan: str | None = None
    exponential: str | None = None

    @classmethod
    def alias(cls, system: NumberingSystem, alias_of: NumberingSystem) -> NumberSymbols:
        """Symbols of ``system`` that are taken from ``alias_of``."""
        return cls(system=system, alias_of=alias_of)


class MonthSymbols(BaseModel, frozen=True):
    months: tuple[str, ...] = ()
    abbreviated: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> MonthSymbols:
        return cls()


class WeekdaySymbols(BaseModel, frozen=True):
    weekdays: tuple[str, ...] = ()
    abbreviated: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> WeekdaySymbols:
        return cls()


class AmPmSymbols(BaseModel, frozen=True):
    """AM then PM marker; a locale may define neither, one or both."""

    markers: tuple[str, ...] = Field(default=(), max_length=2)

    @classmethod
    def empty(cls) -> AmPmSymbols:
        return cls()


class EraSymbols(BaseModel, frozen=True):
    """Abbreviated BCE then CE era names."""

    eras: tuple[str, ...] = Field(default=(), max_length=2)

    @classmethod
    def empty(cls) -> EraSymbols:
        return cls()


class CalendarSymbols(BaseModel, frozen=True):
    """Gregorian calendar symbols of a locale."""

    months: MonthSymbols = MonthSymbols()
    weekdays: WeekdaySymbols = WeekdaySymbols()
    am_pm: AmPmSymbols = AmPmSymbols()
    eras: EraSymbols = EraSymbols()


class DateTimePattern(BaseModel, frozen=True):
    """A date or time format pattern for one format length."""

    kind: str
    rank: Literal[0, 1, 2, 3]
    pattern: str

    @model_validator(mode="after")
    def _rank_matches_kind(self) -> DateTimePattern:
        if PATTERN_RANKS.get(self.kind) != self.rank:
            raise ValueError(f"Pattern kind '{self.kind}' does not have rank {self.rank}")
        return self


class CalendarPatterns(BaseModel, frozen=True):
    date_patterns: tuple[DateTimePattern, ...] = ()
    time_patterns: tuple[DateTimePattern, ...] = ()


class Calendar(BaseModel, frozen=True):
    """A calendar identifier declared in supplementalData.xml."""

    id: str = Field(min_length=1)


class LocaleIdentity(BaseModel, frozen=True):
    """The identity block of an LDML locale file."""

    language: str = Field(min_length=1)
    script: str | None = None
    territory: str | None = None
    variant: str | None = None

    @classmethod
    def parse(cls, tag: str) -> LocaleIdentity:
        """Parse a locale tag such as ``sr-Latn-BA`` or ``en_US_POSIX``."""
        subtags = [part for part in tag.replace("-", KEY_SEPARATOR).split(KEY_SEPARATOR) if part]
        if not subtags:
            raise ValueError(f"Empty locale tag '{tag}'")
        language = subtags[0].lower()
        script: str | None = None
        territory: str | None = None
        variants: list[str] = []
        for subtag in subtags[1:]:
            if script is None and territory is None and len(subtag) == 4 and subtag.isalpha():
                script = subtag.title()
            elif territory is None and not variants and (
                (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit())
            ):
                territory = subtag.upper()
            else:
                variants.append(subtag.upper())
        return cls(
            language=language,
            script=script,
            territory=territory,
            variant=KEY_SEPARATOR.join(variants) or None,
        )

    def subtags(self) -> tuple[str, ...]:
        """Present subtags in language, script, territory, variant order."""
        return tuple(
            part
            for part in (self.language, self.script, self.territory, self.variant)
            if part
        )

    @property
    def canonical_key(self) -> str:
        return KEY_SEPARATOR.join(self.subtags())

    def __str__(self) -> str:
        return self.canonical_key


class LocaleDescriptor(BaseModel, frozen=True):
    """Everything read from a single ``common/main/<bundle>.xml`` file."""

    identity: LocaleIdentity
    bundle_name: str
    default_numbering_system: NumberingSystem | None = None
    number_symbols: Annotated[
        Mapping[str, NumberSymbols],
        AfterValidator(_read_only),
        PlainSerializer(_as_dict),
    ] = Field(default_factory=_empty_mapping)
    calendar_symbols: CalendarSymbols | None = None
    calendar_patterns: CalendarPatterns | None = None

    @model_validator(mode="after")
    def _symbols_keyed_by_system(self) -> LocaleDescriptor:
        for system_id, symbols in self.number_symbols.items():
            if symbols.system.id != system_id:
                raise ValueError(
                    f"Symbols of '{symbols.system.id}' filed under '{system_id}'"
                )
        return self

    @property
    def canonical_key(self) -> str:
        return self.identity.canonical_key

    @property
    def is_root(self) -> bool:
        return self.canonical_key == ROOT_KEY

    def default_symbols(self) -> NumberSymbols | None:
        """Symbols of the default numbering system, if the locale has any."""
        if self.default_numbering_system is None:
            return None
        return self.number_symbols.get(self.default_numbering_system.id)


class ResolvedLocale(BaseModel, frozen=True):
    """A locale descriptor together with the canonical key of its parent."""

    descriptor: LocaleDescriptor
    parent: str | None = None

    @property
    def canonical_key(self) -> str:
        return self.descriptor.canonical_key


class LocaleMetadata(BaseModel, frozen=True):
    """ISO code tables derived from the locale corpus."""

    iso_countries: tuple[str, ...] = ()
    iso_languages: tuple[str, ...] = ()
    scripts: tuple[str, ...] = ()
    iso3_countries: CodeMap = Field(default_factory=_empty_mapping)
    iso3_languages: CodeMap = Field(default_factory=_empty_mapping)


class LocaleModel(BaseModel, frozen=True):
    """The resolved locale graph handed to the writers.

    ``locales`` is ordered so that every parent precedes its children.
    """

    numbering_systems: tuple[NumberingSystem, ...]
    calendars: tuple[Calendar, ...]
    metadata: LocaleMetadata
    locales: tuple[ResolvedLocale, ...]

    def parents(self) -> dict[str, str | None]:
        return {locale.canonical_key: locale.parent for locale in self.locales}

    def locale(self, key: str) -> ResolvedLocale:
        for locale in self.locales:
            if locale.canonical_key == key:
                return locale
        raise KeyError(key)
