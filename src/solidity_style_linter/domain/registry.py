"""Registry of rule kinds the host instantiates per file."""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Type

from solidity_style_linter.domain.config import ConfigurationLoader
from solidity_style_linter.domain.exceptions import RuleDeclarationError
from solidity_style_linter.domain.protocols import ReporterProtocol
from solidity_style_linter.domain.rules import Rule, validate_descriptor
from solidity_style_linter.domain.rules.naming import InterfaceNamesRule, LeadingUnderscoreRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Ordered set of rule kinds, validated when registered rather than per file."""

    def __init__(self, rule_classes: Iterable[Type[Rule]] = ()) -> None:
        self._rules: Dict[str, Type[Rule]] = {}
        for rule_cls in rule_classes:
            self.register(rule_cls)

    def register(self, rule_cls: Type[Rule]) -> Type[Rule]:
        """Add a rule kind. Returns it unchanged so this also works as a class decorator."""
        descriptor = validate_descriptor(rule_cls)
        existing = self._rules.get(descriptor.rule_id)
        if existing is not None and existing is not rule_cls:
            raise RuleDeclarationError(
                f"Rule id {descriptor.rule_id!r} is declared by both {existing.__name__} and {rule_cls.__name__}"
            )
        self._rules[descriptor.rule_id] = rule_cls
        logger.debug("Registered rule %s (%s)", descriptor.rule_id, rule_cls.__name__)
        return rule_cls

    def get(self, rule_id: str) -> Optional[Type[Rule]]:
        return self._rules.get(rule_id)

    @property
    def rule_ids(self) -> List[str]:
        return list(self._rules)

    def __iter__(self) -> Iterator[Type[Rule]]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def create_rules(
        self,
        reporter: ReporterProtocol,
        config: Optional[Mapping[str, Any]],
        source: str,
        file_name: str,
    ) -> List[Rule]:
        """One fresh instance of every registered kind, for a single file."""
        return [rule_cls.create(reporter, config, source, file_name) for rule_cls in self]


def default_registry() -> RuleRegistry:
    return RuleRegistry([InterfaceNamesRule, LeadingUnderscoreRule])


def create_rules(
    reporter: ReporterProtocol,
    config: Optional[Mapping[str, Any]],
    source: str,
    file_name: str,
) -> List[Rule]:
    """Host entry point: instantiate the shipped rules for one file.

    A ``None`` config falls back to the [tool.solidity-style-linter] table.
    """
    if config is None:
        config = ConfigurationLoader().config
    return default_registry().create_rules(reporter, config, source, file_name)
