"""Pytest configuration for the CLDR locale generator test suite.

Fixtures lay out a miniature CLDR tree (see ``tests/samples.py``) under
``tmp_path`` so every test reads real files through the real loaders.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import settings

from cldr_locales.loaders import load_numbering_systems
from cldr_locales.processing import numbering_system_table
from tests.samples import ISO639_2_TXT, write_cldr_tree

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci" if os.getenv("CI") else "dev"))


@pytest.fixture
def cldr_root(tmp_path: Path) -> Path:
    return write_cldr_tree(tmp_path / "cldr")


@pytest.fixture
def iso639_path(tmp_path: Path) -> Path:
    path = tmp_path / "ISO-639-2_utf-8.txt"
    path.write_text(ISO639_2_TXT, encoding="utf-8")
    return path


@pytest.fixture
def systems(cldr_root: Path):
    return numbering_system_table(load_numbering_systems(cldr_root))
