"""File I/O helpers for downloading archives and reading CLDR documents."""

from __future__ import annotations

import zipfile
from pathlib import Path

import requests
from lxml import etree
from tqdm import tqdm

DEFAULT_USER_AGENT = "cldr-locales-generator/1.0"
DEFAULT_TIMEOUT_SECONDS = 60

# CLDR files carry a DOCTYPE pointing at ldml.dtd; it is never fetched.
XML_PARSER = etree.XMLParser(
    remove_comments=True,
    load_dtd=False,
    no_network=True,
    resolve_entities=False,
)


class DownloadError(Exception):
    """Raised when a file download fails."""


class ExtractionError(Exception):
    """Raised when archive extraction fails."""


class DocumentError(Exception):
    """Raised when a CLDR document cannot be read or parsed."""


def download_file(url: str, destination: Path) -> None:
    """Download a file from URL with progress bar.

    Args:
        url: URL to download from.
        destination: Local path to save the file.

    Raises:
        DownloadError: If the download fails.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    partial = destination.with_name(destination.name + ".part")
    try:
        with requests.get(
            url,
            stream=True,
            timeout=DEFAULT_TIMEOUT_SECONDS,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        ) as response:
            response.raise_for_status()
            total_size = int(response.headers.get("content-length", 0))

            with (
                partial.open("wb") as output,
                tqdm(
                    desc=f"Downloading {destination.name}",
                    total=total_size,
                    unit="iB",
                    unit_scale=True,
                    unit_divisor=1024,
                ) as bar,
            ):
                for chunk in response.iter_content(chunk_size=8192):
                    size = output.write(chunk)
                    bar.update(size)

    except requests.RequestException as e:
        partial.unlink(missing_ok=True)
        raise DownloadError(f"Error downloading {url}: {e}") from e
    partial.replace(destination)


def extract_archive(archive_path: Path, destination: Path) -> None:
    """Extract the ``common/`` tree of a CLDR ZIP archive.

    Raises:
        ExtractionError: If extraction fails.
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            member_list = [
                member
                for member in archive.infolist()
                if member.filename.startswith("common/")
            ]
            if not member_list:
                raise ExtractionError(
                    f"Archive '{archive_path}' has no common/ directory."
                )
            with tqdm(
                total=len(member_list),
                desc=f"Extracting {archive_path.name}",
                unit="file",
            ) as bar:
                for member in member_list:
                    archive.extract(member, destination)
                    bar.update(1)
    except zipfile.BadZipFile as e:
        raise ExtractionError(
            f"Failed to open zip file '{archive_path}'. It may be corrupted."
        ) from e
    except OSError as e:
        raise ExtractionError(f"Error extracting archive: {e}") from e


def parse_xml(path: Path) -> etree._Element:
    """Parse an XML document from disk and return its root element."""
    try:
        return etree.parse(str(path), parser=XML_PARSER).getroot()
    except (OSError, etree.XMLSyntaxError) as e:
        raise DocumentError(f"Cannot parse '{path}': {e}") from e


def parse_xml_string(content: str | bytes) -> etree._Element:
    """Parse an in-memory XML document and return its root element."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    try:
        return etree.fromstring(content, parser=XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise DocumentError(f"Cannot parse XML document: {e}") from e


def read_lines(path: Path) -> list[str]:
    """Read a UTF-8 text file (with or without BOM) as a list of lines."""
    try:
        with path.open(encoding="utf-8-sig") as handle:
            return handle.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Cannot read '{path}': {e}") from e
