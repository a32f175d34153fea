"""
Java runtime support for dtcw.

This module provides functionality for:
- Locating the Java runtime and validating its version
- Installing a Temurin JDK into the dtcw install root
"""

from dtcw.runtime.java import (
    SUPPORTED_JAVA_VERSIONS,
    locate_java,
    parse_major_version,
    validate_runtime,
)
from dtcw.runtime.installer import (
    RuntimeExtractionError,
    install_runtime,
)

__all__ = [
    "SUPPORTED_JAVA_VERSIONS",
    "locate_java",
    "parse_major_version",
    "validate_runtime",
    "RuntimeExtractionError",
    "install_runtime",
]
