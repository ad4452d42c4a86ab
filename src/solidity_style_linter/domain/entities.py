"""Rule identity and violation records."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RuleDescriptor:
    """Static identity of a rule kind.

    ``is_global`` rules are never ignored, whatever the file path.
    """

    rule_id: str
    is_global: bool = False


@dataclass(frozen=True)
class Violation:
    """A diagnostic as handed to a reporter."""

    node: Any
    rule_id: str
    message: str
