"""Write the resolved locale model as JSON artifacts."""

from __future__ import annotations

import json
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .models import (
    CalendarPatterns,
    DateTimePattern,
    LocaleModel,
    NumberSymbols,
    ResolvedLocale,
)

NUMBERING_SYSTEMS_OUTPUT = "numbering_systems.json"
CALENDARS_OUTPUT = "calendars.json"
METADATA_OUTPUT = "metadata.json"
LOCALES_OUTPUT = "locales.json"


def _write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
    )
    return path


def symbols_record(symbols: NumberSymbols) -> dict[str, Any]:
    record = symbols.model_dump(exclude={"system", "alias_of"})
    return {
        "system": symbols.system.id,
        "alias_of": symbols.alias_of.id if symbols.alias_of else None,
        **record,
    }


def _patterns_by_rank(patterns: Iterable[DateTimePattern]) -> dict[str, str]:
    return {str(pattern.rank): pattern.pattern for pattern in patterns}


def patterns_record(patterns: CalendarPatterns | None) -> dict[str, Any] | None:
    if patterns is None:
        return None
    return {
        "dates": _patterns_by_rank(patterns.date_patterns),
        "times": _patterns_by_rank(patterns.time_patterns),
    }


def locale_record(locale: ResolvedLocale) -> dict[str, Any]:
    """JSON shape of one locale; the parent is referenced by its key."""
    descriptor = locale.descriptor
    default_system = descriptor.default_numbering_system
    calendar_symbols = descriptor.calendar_symbols
    return {
        "name": locale.canonical_key,
        "parent": locale.parent,
        "bundle": descriptor.bundle_name,
        "identity": descriptor.identity.model_dump(),
        "default_numbering_system": default_system.id if default_system else None,
        "number_symbols": [
            symbols_record(descriptor.number_symbols[system_id])
            for system_id in sorted(descriptor.number_symbols)
        ],
        "calendar_symbols": (
            calendar_symbols.model_dump(mode="json") if calendar_symbols else None
        ),
        "calendar_patterns": patterns_record(descriptor.calendar_patterns),
    }


def write_numbering_systems(output_dir: Path, model: LocaleModel) -> Path:
    return _write_json(
        output_dir / NUMBERING_SYSTEMS_OUTPUT,
        [system.model_dump(mode="json") for system in model.numbering_systems],
    )


def write_calendars(output_dir: Path, model: LocaleModel) -> Path:
    return _write_json(
        output_dir / CALENDARS_OUTPUT,
        [calendar.id for calendar in model.calendars],
    )


def write_metadata(output_dir: Path, model: LocaleModel) -> Path:
    return _write_json(output_dir / METADATA_OUTPUT, model.metadata.model_dump(mode="json"))


def write_locales(output_dir: Path, model: LocaleModel) -> Path:
    return _write_json(
        output_dir / LOCALES_OUTPUT,
        [locale_record(locale) for locale in model.locales],
    )


def write_model(output_dir: Path, model: LocaleModel) -> list[Path]:
    """Write every artifact into ``output_dir`` and return their paths.

    Artifacts are staged in a scratch directory inside ``output_dir`` and only
    moved into place once all of them are written, so a failed run leaves the
    previous artifacts untouched.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(dir=output_dir, prefix=".staging-") as tmp_dir:
        staging_dir = Path(tmp_dir)
        staged = [
            write_numbering_systems(staging_dir, model),
            write_calendars(staging_dir, model),
            write_metadata(staging_dir, model),
            write_locales(staging_dir, model),
        ]
        return [path.replace(output_dir / path.name) for path in staged]
