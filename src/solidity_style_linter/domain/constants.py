"""Compiled-in engine constants."""

# Files matching these globs are skipped by every rule that is not global.
IGNORE_PATTERNS: tuple[str, ...] = ("test/**/*",)

# [tool.<section>] table read from pyproject.toml
CONFIG_SECTION: str = "solidity-style-linter"

VISIBILITY_PRIVATE: str = "private"
VISIBILITY_INTERNAL: str = "internal"

KIND_INTERFACE: str = "interface"
KIND_LIBRARY: str = "library"

LEADING_UNDERSCORE: str = "_"
