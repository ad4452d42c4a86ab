"""In-memory reporter sink."""

from typing import Any, List

from solidity_style_linter.domain.entities import Violation


class CollectingReporter:
    """Keeps every reported violation in order. Satisfies ReporterProtocol."""

    def __init__(self) -> None:
        self.violations: List[Violation] = []

    def error(self, node: Any, rule_id: str, message: str) -> None:
        self.violations.append(Violation(node=node, rule_id=rule_id, message=message))

    def rule_ids(self) -> List[str]:
        return [violation.rule_id for violation in self.violations]

    def messages(self) -> List[str]:
        return [violation.message for violation in self.violations]

    def clear(self) -> None:
        self.violations.clear()

    def __len__(self) -> int:
        return len(self.violations)
