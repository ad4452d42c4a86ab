"""Path-based ignore resolution for non-global rules."""

import fnmatch
import logging
import posixpath
from dataclasses import dataclass

from solidity_style_linter.domain.constants import IGNORE_PATTERNS

logger = logging.getLogger(__name__)

_GLOBSTAR = "**"


def normalize_path(file_name: str) -> str:
    """Normalize a file name to forward slashes with ``.`` and ``..`` segments collapsed.

    ``test\\a.sol``, ``./test/a.sol`` and ``test//a.sol`` all become ``test/a.sol``.
    """
    return posixpath.normpath(str(file_name).replace("\\", "/"))


def _segment_match(segment: str, pattern: str) -> bool:
    # Wildcards never match a leading dot unless the pattern spells it out.
    if segment.startswith(".") and not pattern.startswith("."):
        return False
    return fnmatch.fnmatchcase(segment, pattern)


def _match_segments(segments: list[str], patterns: list[str]) -> bool:
    if not patterns:
        return not segments
    head, rest = patterns[0], patterns[1:]
    if head == _GLOBSTAR:
        for skip in range(len(segments) + 1):
            if _match_segments(segments[skip:], rest):
                return True
            if skip < len(segments) and segments[skip].startswith("."):
                return False
        return False
    if not segments or not _segment_match(segments[0], head):
        return False
    return _match_segments(segments[1:], rest)


def glob_match(path: str, pattern: str) -> bool:
    """Case-sensitive glob match of an already normalized path.

    Matching is per ``/`` segment: ``*`` and ``?`` stay inside one segment,
    ``**`` spans zero or more segments, and no wildcard matches a segment
    starting with ``.``.
    """
    return _match_segments(path.split("/"), pattern.split("/"))


@dataclass(frozen=True)
class IgnorePolicy:
    """Ordered set of globs; a file matching any of them is ignored by non-global rules."""

    patterns: tuple[str, ...] = IGNORE_PATTERNS

    def matches(self, file_name: str) -> bool:
        path = normalize_path(file_name)
        for pattern in self.patterns:
            if glob_match(path, pattern):
                logger.debug("%s matches ignore pattern %s", path, pattern)
                return True
        return False


DEFAULT_IGNORE_POLICY = IgnorePolicy()
