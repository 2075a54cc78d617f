"""Build typed locale records out of a parsed LDML document."""

from __future__ import annotations

from collections.abc import Mapping

from .errors import LocaleDataError, MalformedPatternError, MissingIdentityError
from .models import (
    LATN,
    PATTERN_RANKS,
    AmPmSymbols,
    CalendarPatterns,
    CalendarSymbols,
    DateTimePattern,
    EraSymbols,
    LocaleDescriptor,
    LocaleIdentity,
    MonthSymbols,
    NumberingSystem,
    NumberSymbols,
    WeekdaySymbols,
)
from .readers import (
    Element,
    element_text,
    filtered_list,
    first_child,
    has_content,
    is_variant,
    symbol_char,
    symbol_string,
    typed_entry,
)


def latin_system(systems: Mapping[str, NumberingSystem]) -> NumberingSystem:
    """The ``latn`` system every locale falls back to."""
    try:
        return systems[LATN]
    except KeyError:
        raise LocaleDataError(
            f"Numbering system '{LATN}' is missing from numberingSystems.xml."
        ) from None


def gregorian_calendar(ldml: Element) -> Element | None:
    """First non-empty ``calendar[@type="gregorian"]`` under ``dates``."""
    dates = first_child(ldml, "dates")
    if dates is None:
        return None
    for calendar in dates.iter("calendar"):
        if calendar.get("type") == "gregorian" and has_content(calendar):
            return calendar
    return None


def _format_context(calendar: Element, tag: str) -> Element | None:
    for context in calendar.iter(tag):
        if context.get("type") == "format":
            return context
    return None


def read_month_symbols(calendar: Element) -> MonthSymbols | None:
    context = _format_context(calendar, "monthContext")
    if context is None:
        return None
    return MonthSymbols(
        months=tuple(filtered_list(context, "monthWidth", "month", "wide")),
        abbreviated=tuple(filtered_list(context, "monthWidth", "month", "abbreviated")),
    )


def read_weekday_symbols(calendar: Element) -> WeekdaySymbols | None:
    context = _format_context(calendar, "dayContext")
    if context is None:
        return None
    return WeekdaySymbols(
        weekdays=tuple(filtered_list(context, "dayWidth", "day", "wide")),
        abbreviated=tuple(filtered_list(context, "dayWidth", "day", "abbreviated")),
    )


def read_am_pm_symbols(calendar: Element) -> AmPmSymbols | None:
    for periods in calendar.iter("dayPeriods"):
        for context in periods.iterchildren("dayPeriodContext"):
            if context.get("type") != "format":
                continue
            for width in context.iter("dayPeriodWidth"):
                if width.get("type") != "wide":
                    continue
                # am and pm are always defined together
                am = typed_entry(width.iterchildren("dayPeriod"), "am")
                pm = typed_entry(width.iterchildren("dayPeriod"), "pm")
                return AmPmSymbols(
                    markers=tuple(marker for marker in (am, pm) if marker is not None)
                )
    return None


def read_era_symbols(calendar: Element) -> EraSymbols | None:
    eras = first_child(calendar, "eras")
    if eras is None:
        return None
    entries = [
        era for abbreviations in eras.iterchildren("eraAbbr") for era in abbreviations.iter("era")
    ]
    bce = typed_entry(entries, "0")
    ce = typed_entry(entries, "1")
    return EraSymbols(eras=tuple(era for era in (bce, ce) if era is not None))


def read_calendar_symbols(calendar: Element | None) -> CalendarSymbols | None:
    """Gregorian symbols, or ``None`` when the calendar defines none of them.

    Once any group is present the missing ones become empty groups.
    """
    if calendar is None:
        return None
    months = read_month_symbols(calendar)
    weekdays = read_weekday_symbols(calendar)
    am_pm = read_am_pm_symbols(calendar)
    eras = read_era_symbols(calendar)
    if months is None and weekdays is None and am_pm is None and eras is None:
        return None
    return CalendarSymbols(
        months=months if months is not None else MonthSymbols.empty(),
        weekdays=weekdays if weekdays is not None else WeekdaySymbols.empty(),
        am_pm=am_pm if am_pm is not None else AmPmSymbols.empty(),
        eras=eras if eras is not None else EraSymbols.empty(),
    )


def pattern_rank(kind: str, bundle_name: str) -> int:
    """Map a format length (full, long, medium, short) to its rank."""
    try:
        return PATTERN_RANKS[kind]
    except KeyError:
        raise MalformedPatternError(bundle_name, kind) from None


def _read_patterns(
    formats: Element | None, length_tag: str, format_tag: str, bundle_name: str
) -> tuple[DateTimePattern, ...]:
    if formats is None:
        return ()
    patterns: list[DateTimePattern] = []
    for length in formats.iterchildren(length_tag):
        kind = length.get("type", "")
        for format_node in length.iterchildren(format_tag):
            for pattern in format_node.iterchildren("pattern"):
                if is_variant(pattern):
                    continue
                patterns.append(
                    DateTimePattern(
                        kind=kind,
                        rank=pattern_rank(kind, bundle_name),
                        pattern=element_text(pattern),
                    )
                )
    return tuple(patterns)


def read_calendar_patterns(
    calendar: Element | None, bundle_name: str
) -> CalendarPatterns | None:
    """Date and time patterns of the gregorian calendar.

    Any gregorian calendar yields a pattern set; missing formats give empty groups.

    Raises:
        MalformedPatternError: If a format length is not one of the four known kinds.
    """
    if calendar is None:
        return None
    date_formats = next(calendar.iter("dateFormats"), None)
    time_formats = next(calendar.iter("timeFormats"), None)
    return CalendarPatterns(
        date_patterns=_read_patterns(date_formats, "dateFormatLength", "dateFormat", bundle_name),
        time_patterns=_read_patterns(time_formats, "timeFormatLength", "timeFormat", bundle_name),
    )


def read_number_symbols(
    numbers: Element | None, systems: Mapping[str, NumberingSystem]
) -> dict[str, NumberSymbols]:
    """Number symbols per numbering system id.

    A ``symbols`` block without ``numberSystem`` belongs to ``latn``. Blocks
    naming a system that is not numeric in numberingSystems.xml are skipped.
    """
    symbols: dict[str, NumberSymbols] = {}
    if numbers is None:
        return symbols
    latn = latin_system(systems)
    for block in numbers.iter("symbols"):
        if is_variant(block):
            continue
        system = systems.get(block.get("numberSystem") or LATN)
        if system is None:
            continue
        if first_child(block, "alias") is not None:
            # Every symbols alias in CLDR points at latn; the declared target is not read.
            symbols[system.id] = NumberSymbols.alias(system, latn)
            continue
        symbols[system.id] = NumberSymbols(
            system=system,
            decimal=symbol_char(block, "decimal"),
            group=symbol_char(block, "group"),
            list_separator=symbol_char(block, "list"),
            percent=symbol_char(block, "percentSign"),
            plus=symbol_char(block, "plusSign"),
            minus=symbol_char(block, "minusSign"),
            per_mille=symbol_char(block, "perMille"),
            infinity=symbol_string(block, "infinity"),
            nan=symbol_string(block, "nan"),
            exponential=symbol_string(block, "exponential"),
        )
    return symbols


def read_default_numbering_system(
    numbers: Element | None, systems: Mapping[str, NumberingSystem]
) -> NumberingSystem | None:
    """The default numbering system, dropped when it is not a known numeric one."""
    if numbers is None:
        return None
    for element in numbers.iterchildren("defaultNumberingSystem"):
        if element.get("alt") is None:
            return systems.get(element_text(element).strip())
    return None


def read_identity(ldml: Element, bundle_name: str) -> LocaleIdentity:
    identity = first_child(ldml, "identity")

    def subtag(tag: str) -> str | None:
        element = first_child(identity, tag)
        if element is None:
            return None
        return element.get("type") or None

    language = subtag("language")
    if not language:
        raise MissingIdentityError(bundle_name)
    return LocaleIdentity(
        language=language,
        script=subtag("script"),
        territory=subtag("territory"),
        variant=subtag("variant"),
    )


def build_locale_descriptor(
    bundle_name: str, ldml: Element, systems: Mapping[str, NumberingSystem]
) -> LocaleDescriptor:
    """Assemble the descriptor of one ``common/main`` file.

    Args:
        bundle_name: File name without extension, e.g. ``en_GB``.
        ldml: Root ``ldml`` element of the file.
        systems: Numeric numbering systems by id.
    """
    numbers = first_child(ldml, "numbers")
    calendar = gregorian_calendar(ldml)
    return LocaleDescriptor(
        identity=read_identity(ldml, bundle_name),
        bundle_name=bundle_name,
        default_numbering_system=read_default_numbering_system(numbers, systems),
        number_symbols=read_number_symbols(numbers, systems),
        calendar_symbols=read_calendar_symbols(calendar),
        calendar_patterns=read_calendar_patterns(calendar, bundle_name),
    )
