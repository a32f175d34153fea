"""Test fixtures for dtcw tests.

This package provides reusable pytest fixtures for testing dtcw components.
Fixtures are organized by type:

- directories: Install roots, SDKMAN directories, JDKs
- settings: Settings factories and probed host capabilities

Import fixtures in your tests using:
    from tests.fixtures.directories import dtc_root
    from tests.fixtures.settings import make_settings
"""

__all__ = [
    "directories",
    "settings",
]
