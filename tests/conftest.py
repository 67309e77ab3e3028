"""Pytest configuration for the loctree test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Pick the Hypothesis profile for the current execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev"
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FILESYSTEM FIXTURES
# =============================================================================


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document below tmp_path and return its path."""

    def _write(relative: str, document: object) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def lang_dir(tmp_path: Path, write_json) -> Path:
    """Two-language layout with a definitions file.

    English: files a.json and b.json (first wins on 'greet').
    German: folder de/ holding menu.json and sub/tips.json.
    """
    write_json("a.json", {"greet": "hi", "ui": {"play": "Play"}})
    write_json("b.json", {"greet": "bye", "farewell": "later"})
    write_json("de/menu.json", {"ui": {"play": "Spielen"}, "greet": "hallo"})
    write_json("de/sub/tips.json", {"tips": ["eins", "zwei"]})
    write_json(
        "languages.json",
        {
            "English": {"name": "English", "code": "en", "files": ["a.json", "b.json"]},
            "German": {"name": "Deutsch", "code": "de", "folders": "de"},
        },
    )
    return tmp_path
