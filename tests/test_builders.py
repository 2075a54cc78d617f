"""Tests for building locale records from LDML documents."""

from __future__ import annotations

import pytest

from cldr_locales.builders import (
    build_locale_descriptor,
    gregorian_calendar,
    pattern_rank,
    read_calendar_patterns,
    read_calendar_symbols,
    read_default_numbering_system,
    read_identity,
    read_number_symbols,
)
from cldr_locales.errors import LocaleDataError, MalformedPatternError, MissingIdentityError
from cldr_locales.io import parse_xml_string
from cldr_locales.models import (
    AmPmSymbols,
    EraSymbols,
    MonthSymbols,
    NumberingSystem,
    WeekdaySymbols,
)
from tests.samples import (
    AR_BODY,
    EN_BODY,
    EN_IN_BODY,
    LOCALES,
    ROOT_BODY,
    SR_LATN_BODY,
    ldml,
)


def calendar_of(body: str):
    return gregorian_calendar(parse_xml_string(ldml("xx", body=body)))


def gregorian(inner: str) -> str:
    return (
        '<dates><calendars><calendar type="gregorian">'
        + inner
        + "</calendar></calendars></dates>"
    )


class TestGregorianCalendar:
    def test_skips_other_calendars(self) -> None:
        calendar = calendar_of(ROOT_BODY)
        assert calendar is not None
        assert calendar.get("type") == "gregorian"

    def test_alias_only_calendar_is_skipped(self) -> None:
        body = gregorian('<alias source="locale" path="../calendar[@type=\'generic\']"/>')
        assert calendar_of(body) is None

    def test_no_dates_section(self) -> None:
        assert calendar_of("") is None


class TestCalendarSymbols:
    """Calendar symbols are read per group from the gregorian calendar."""

    def test_reads_all_groups(self) -> None:
        symbols = read_calendar_symbols(calendar_of(ROOT_BODY))
        assert symbols is not None
        assert symbols.months == MonthSymbols(months=("M01", "M02"), abbreviated=("M01", "M02"))
        assert symbols.weekdays == WeekdaySymbols(weekdays=("Sun", "Mon"), abbreviated=("Sun", "Mon"))
        assert symbols.am_pm == AmPmSymbols(markers=("AM", "PM"))
        assert symbols.eras == EraSymbols(eras=("BCE", "CE"))

    def test_missing_groups_default_to_empty(self) -> None:
        symbols = read_calendar_symbols(calendar_of(EN_BODY))
        assert symbols is not None
        assert symbols.months.months == ("January", "February")
        assert symbols.months.abbreviated == ()
        assert symbols.weekdays == WeekdaySymbols.empty()
        assert symbols.am_pm == AmPmSymbols.empty()
        assert symbols.eras == EraSymbols.empty()

    def test_calendar_with_only_patterns_has_no_symbols(self) -> None:
        body = gregorian(
            '<dateFormats><dateFormatLength type="short"><dateFormat>'
            "<pattern>d/M/y</pattern></dateFormat></dateFormatLength></dateFormats>"
        )
        assert read_calendar_symbols(calendar_of(body)) is None

    def test_variant_eras_are_dropped(self) -> None:
        symbols = read_calendar_symbols(calendar_of(SR_LATN_BODY))
        assert symbols is not None
        assert symbols.eras.eras == ("p. n. e.",)

    def test_only_variant_eras_give_empty_list(self) -> None:
        body = gregorian(
            '<eras><eraAbbr><era type="0" alt="variant">BCE</era>'
            '<era type="1" alt="variant">CE</era></eraAbbr></eras>'
        )
        symbols = read_calendar_symbols(calendar_of(body))
        assert symbols is not None
        assert symbols.eras.eras == ()

    def test_am_pm_ignores_other_contexts_and_widths(self) -> None:
        body = gregorian(
            "<dayPeriods>"
            '<dayPeriodContext type="stand-alone"><dayPeriodWidth type="wide">'
            '<dayPeriod type="am">x</dayPeriod></dayPeriodWidth></dayPeriodContext>'
            '<dayPeriodContext type="format">'
            '<dayPeriodWidth type="narrow"><dayPeriod type="am">a</dayPeriod></dayPeriodWidth>'
            '<dayPeriodWidth type="wide"><dayPeriod type="am">am</dayPeriod>'
            '<dayPeriod type="am" alt="variant">a.m.</dayPeriod>'
            '<dayPeriod type="pm">pm</dayPeriod></dayPeriodWidth>'
            "</dayPeriodContext></dayPeriods>"
        )
        symbols = read_calendar_symbols(calendar_of(body))
        assert symbols is not None
        assert symbols.am_pm.markers == ("am", "pm")

    def test_absent_calendar_is_none(self) -> None:
        assert read_calendar_symbols(None) is None


class TestCalendarPatterns:
    """Date and time patterns carry the rank of their format length."""

    def test_ranks_follow_format_length(self) -> None:
        patterns = read_calendar_patterns(calendar_of(ROOT_BODY), "root")
        assert patterns is not None
        assert [(p.kind, p.rank, p.pattern) for p in patterns.date_patterns] == [
            ("full", 0, "y MMMM d, EEEE"),
            ("long", 1, "y MMMM d"),
            ("medium", 2, "y MMM d"),
            ("short", 3, "y-MM-dd"),
        ]
        assert [(p.rank, p.pattern) for p in patterns.time_patterns] == [
            (0, "HH:mm:ss zzzz"),
            (3, "HH:mm"),
        ]

    def test_missing_time_formats_give_empty_group(self) -> None:
        body = gregorian(
            '<dateFormats><dateFormatLength type="short"><dateFormat>'
            "<pattern>d/M/y</pattern></dateFormat></dateFormatLength></dateFormats>"
        )
        patterns = read_calendar_patterns(calendar_of(body), "xx")
        assert patterns is not None
        assert len(patterns.date_patterns) == 1
        assert patterns.time_patterns == ()

    def test_symbols_only_calendar_has_empty_patterns(self) -> None:
        patterns = read_calendar_patterns(calendar_of(EN_BODY), "en")
        assert patterns is not None
        assert patterns.date_patterns == ()
        assert patterns.time_patterns == ()

    def test_absent_calendar_is_none(self) -> None:
        assert read_calendar_patterns(None, "xx") is None

    def test_variant_patterns_are_dropped(self) -> None:
        body = gregorian(
            '<timeFormats><timeFormatLength type="short"><timeFormat>'
            '<pattern>h:mm a</pattern><pattern alt="variant">HH:mm</pattern>'
            "</timeFormat></timeFormatLength></timeFormats>"
        )
        patterns = read_calendar_patterns(calendar_of(body), "xx")
        assert patterns is not None
        assert [p.pattern for p in patterns.time_patterns] == ["h:mm a"]

    def test_unknown_kind_names_locale_and_kind(self) -> None:
        body = gregorian(
            '<dateFormats><dateFormatLength type="extralong"><dateFormat>'
            "<pattern>EEEE d MMMM y</pattern></dateFormat></dateFormatLength></dateFormats>"
        )
        with pytest.raises(MalformedPatternError, match="extralong") as exc_info:
            read_calendar_patterns(calendar_of(body), "xx_YY")
        assert exc_info.value.kind == "extralong"
        assert exc_info.value.bundle_name == "xx_YY"
        assert "xx_YY" in str(exc_info.value)

    def test_pattern_rank_table(self) -> None:
        assert [pattern_rank(kind, "root") for kind in ("full", "long", "medium", "short")] == [
            0,
            1,
            2,
            3,
        ]
        with pytest.raises(MalformedPatternError):
            pattern_rank("Full", "root")


class TestNumberSymbols:
    """Number symbols are keyed by the numbering system that owns them."""

    def numbers(self, body: str):
        return parse_xml_string(ldml("xx", body=body)).find("numbers")

    def test_reads_every_symbol(self, systems) -> None:
        symbols = read_number_symbols(self.numbers(ROOT_BODY), systems)
        latn = symbols["latn"]
        assert latn.system == systems["latn"]
        assert latn.alias_of is None
        assert (latn.decimal, latn.group, latn.list_separator) == (".", ",", ";")
        assert (latn.percent, latn.plus, latn.minus, latn.per_mille) == ("%", "+", "-", "‰")
        assert (latn.infinity, latn.nan, latn.exponential) == ("∞", "NaN", "E")

    def test_alias_block_points_at_latn(self, systems) -> None:
        symbols = read_number_symbols(self.numbers(ROOT_BODY), systems)
        assert symbols["arab"].system == systems["arab"]
        assert symbols["arab"].alias_of == systems["latn"]
        assert symbols["arab"].decimal is None

    def test_missing_number_system_attribute_means_latn(self, systems) -> None:
        body = "<numbers><symbols><decimal>,</decimal></symbols></numbers>"
        symbols = read_number_symbols(self.numbers(body), systems)
        assert list(symbols) == ["latn"]
        assert symbols["latn"].decimal == ","
        assert symbols["latn"].group is None

    def test_direction_marks_are_stripped(self, systems) -> None:
        symbols = read_number_symbols(self.numbers(AR_BODY), systems)
        assert symbols["arab"].minus == "-"
        assert symbols["arab"].decimal == "\u066b"
        assert symbols["latn"].minus == "-"

    def test_unknown_system_blocks_are_skipped(self, systems) -> None:
        assert read_number_symbols(self.numbers(EN_IN_BODY), systems) == {}

    def test_absent_numbers_section(self, systems) -> None:
        assert read_number_symbols(None, systems) == {}

    def test_latn_is_required(self) -> None:
        body = "<numbers><symbols><decimal>,</decimal></symbols></numbers>"
        arab = NumberingSystem(id="arab", digits=tuple("٠١٢٣٤٥٦٧٨٩"))
        with pytest.raises(LocaleDataError, match="latn"):
            read_number_symbols(self.numbers(body), {"arab": arab})


class TestDefaultNumberingSystem:
    def numbers(self, body: str):
        return parse_xml_string(f"<numbers>{body}</numbers>")

    def test_known_system(self, systems) -> None:
        numbers = self.numbers("<defaultNumberingSystem>arab</defaultNumberingSystem>")
        assert read_default_numbering_system(numbers, systems) == systems["arab"]

    def test_unknown_system_is_dropped(self, systems) -> None:
        numbers = self.numbers("<defaultNumberingSystem>roman</defaultNumberingSystem>")
        assert read_default_numbering_system(numbers, systems) is None

    def test_alternate_defaults_are_ignored(self, systems) -> None:
        numbers = self.numbers(
            '<defaultNumberingSystem alt="latn">latn</defaultNumberingSystem>'
            "<defaultNumberingSystem>arab</defaultNumberingSystem>"
        )
        assert read_default_numbering_system(numbers, systems) == systems["arab"]

    def test_absent(self, systems) -> None:
        assert read_default_numbering_system(self.numbers(""), systems) is None
        assert read_default_numbering_system(None, systems) is None


class TestIdentity:
    def test_reads_all_subtags(self) -> None:
        document = parse_xml_string(ldml("sr", script="Latn", territory="BA", variant="EKAVSK"))
        identity = read_identity(document, "sr_Latn_BA_EKAVSK")
        assert identity.subtags() == ("sr", "Latn", "BA", "EKAVSK")

    def test_missing_language_is_fatal(self) -> None:
        document = parse_xml_string(ldml("", territory="GB"))
        with pytest.raises(MissingIdentityError, match="broken"):
            read_identity(document, "broken")

    def test_empty_language_is_fatal(self) -> None:
        document = parse_xml_string('<ldml><identity><language type=""/></identity></ldml>')
        with pytest.raises(MissingIdentityError):
            read_identity(document, "empty")


class TestBuildLocaleDescriptor:
    def test_root_descriptor(self, systems) -> None:
        descriptor = build_locale_descriptor("root", parse_xml_string(LOCALES["root"]), systems)
        assert descriptor.bundle_name == "root"
        assert descriptor.canonical_key == "root"
        assert descriptor.is_root
        assert descriptor.default_numbering_system == systems["latn"]
        assert set(descriptor.number_symbols) == {"arab", "latn"}
        assert descriptor.default_symbols() == descriptor.number_symbols["latn"]
        assert descriptor.calendar_symbols is not None
        assert descriptor.calendar_patterns is not None

    def test_identity_only_locale(self, systems) -> None:
        descriptor = build_locale_descriptor("en_001", parse_xml_string(LOCALES["en_001"]), systems)
        assert descriptor.canonical_key == "en_001"
        assert descriptor.default_numbering_system is None
        assert descriptor.number_symbols == {}
        assert descriptor.default_symbols() is None
        assert descriptor.calendar_symbols is None
        assert descriptor.calendar_patterns is None

    def test_number_symbols_are_read_only(self, systems) -> None:
        descriptor = build_locale_descriptor("ar", parse_xml_string(LOCALES["ar"]), systems)
        with pytest.raises(TypeError):
            descriptor.number_symbols["latn"] = descriptor.number_symbols["arab"]  # type: ignore[index]
        assert set(descriptor.number_symbols) == {"arab", "latn"}

    def test_unknown_default_system_is_dropped(self, systems) -> None:
        descriptor = build_locale_descriptor("en_IN", parse_xml_string(LOCALES["en_IN"]), systems)
        assert descriptor.default_numbering_system is None

