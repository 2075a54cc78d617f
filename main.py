#!/usr/bin/env python3
"""CLI entrypoint for generating resolved locale data from CLDR XML."""

from __future__ import annotations

import tempfile
import time
from pathlib import Path
from typing import Annotated

import typer

from cldr_locales.io import (
    DocumentError,
    DownloadError,
    ExtractionError,
    download_file,
    extract_archive,
)
from cldr_locales.loaders import main_dir
from cldr_locales.processing import collect_model, select_locales
from cldr_locales.writers import write_model

CLDR_RELEASE = "44.0"
CLDR_ARCHIVE_NAME = f"cldr-common-{CLDR_RELEASE}.zip"
CLDR_URL = (
    f"https://unicode.org/Public/cldr/{CLDR_RELEASE.split('.')[0]}/{CLDR_ARCHIVE_NAME}"
)
ISO639_2_FILE_NAME = "ISO-639-2_utf-8.txt"
ISO639_2_URL = f"https://www.loc.gov/standards/iso639-2/{ISO639_2_FILE_NAME}"

__SCRIPT_DIR = Path(__file__).resolve().parent
CACHE_DIR = __SCRIPT_DIR / "cldr"
DEFAULT_OUTPUT_DIR = __SCRIPT_DIR / "build" / "locales"

app = typer.Typer(
    help="Generate resolved locale data files from CLDR XML data.",
    add_completion=False,
)


def fetch_cached(url: str, cached_path: Path) -> Path:
    """Return ``cached_path``, downloading ``url`` into it when missing."""
    if cached_path.is_file():
        typer.echo(f"Using cached file: {cached_path}")
        return cached_path
    typer.echo(f"Downloading {url}...")
    try:
        download_file(url, cached_path)
    except DownloadError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return cached_path


@app.command()
def main(
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Destination directory for the generated JSON files.",
            file_okay=False,
            dir_okay=True,
            writable=True,
            resolve_path=True,
        ),
    ] = DEFAULT_OUTPUT_DIR,
    cldr_zip: Annotated[
        Path | None,
        typer.Option(
            "--cldr-zip",
            help="Path to an existing cldr-common archive. If missing, the archive is downloaded to the cache.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    cldr_dir: Annotated[
        Path | None,
        typer.Option(
            "--cldr-dir",
            help="Path to an already extracted CLDR tree (the directory holding common/).",
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    iso639_file: Annotated[
        Path | None,
        typer.Option(
            "--iso639-file",
            help="Path to the ISO-639-2 pipe-delimited code list. Downloaded to the cache when omitted.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    only: Annotated[
        list[str] | None,
        typer.Option(
            "--only",
            help="Only write these locales (e.g. en_GB, sr-Latn) and their ancestors. Repeatable.",
        ),
    ] = None,
    progress: Annotated[
        bool,
        typer.Option("--progress/--no-progress", help="Show a progress bar while reading locales."),
    ] = True,
) -> None:
    """Generate numbering systems, calendars, metadata and locale files from CLDR."""
    started = time.perf_counter()
    if cldr_zip and cldr_dir:
        typer.secho(
            "Error: --cldr-zip and --cldr-dir are mutually exclusive.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    with tempfile.TemporaryDirectory() as tmp_dir:
        if cldr_dir:
            cldr_root = cldr_dir
            typer.echo(f"Using extracted CLDR tree: {cldr_root}")
        else:
            if cldr_zip:
                archive_path = cldr_zip
                typer.echo(f"Using existing CLDR archive: {archive_path}")
            else:
                archive_path = fetch_cached(CLDR_URL, CACHE_DIR / CLDR_ARCHIVE_NAME)

            typer.echo(f"Extracting {archive_path.name}...")
            cldr_root = Path(tmp_dir) / "cldr"
            try:
                extract_archive(archive_path, cldr_root)
            except ExtractionError as e:
                typer.secho(str(e), fg=typer.colors.RED, err=True)
                raise typer.Exit(code=1)

        if not main_dir(cldr_root).is_dir():
            typer.secho(
                "Error: CLDR locale data (common/main) missing.",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)

        iso639_path = iso639_file or fetch_cached(
            ISO639_2_URL, CACHE_DIR / ISO639_2_FILE_NAME
        )

        typer.echo("Reading CLDR locale data...")
        try:
            model = collect_model(cldr_root, iso639_path, progress=progress)
            if only:
                model = select_locales(model, only)
        except (ValueError, DocumentError) as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.echo(
        f"Writing {len(model.numbering_systems)} numbering systems, "
        f"{len(model.calendars)} calendars and {len(model.locales)} locales to {output_dir}..."
    )
    try:
        written = write_model(output_dir, model)
    except OSError as e:
        typer.secho(f"Error: cannot write to {output_dir}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    for path in written:
        typer.echo(f"Write to {path}")

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    typer.secho(
        f"\nSuccessfully wrote {len(model.locales)} locales to {output_dir} in {elapsed_ms} ms",
        fg=typer.colors.GREEN,
        bold=True,
    )


if __name__ == "__main__":
    app()
