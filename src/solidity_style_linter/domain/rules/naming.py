"""Naming convention rules: interface-names and leading-underscore."""

import re
from typing import Optional

from solidity_style_linter.domain.ast import AstNode, NodeType
from solidity_style_linter.domain.constants import (
    KIND_INTERFACE,
    KIND_LIBRARY,
    LEADING_UNDERSCORE,
    VISIBILITY_INTERNAL,
    VISIBILITY_PRIVATE,
)
from solidity_style_linter.domain.entities import RuleDescriptor
from solidity_style_linter.domain.rules import Rule, handles

INTERFACE_NAME_PATTERN = re.compile(r"^I[A-Z]")


def _name(node: AstNode) -> str:
    return node.get("name") or ""


def _has_leading_underscore(node: AstNode) -> bool:
    return _name(node).startswith(LEADING_UNDERSCORE)


def _enclosing_kind(node: AstNode) -> Optional[str]:
    parent = node.parent
    if parent is None:
        return None
    return parent.get("kind")


class InterfaceNamesRule(Rule):
    """Interfaces are named ``I`` followed by an uppercase letter."""

    descriptor = RuleDescriptor(rule_id="interface-names")

    MSG_MISSING_PREFIX = "Interface names should have a capital I prefix"

    @handles(NodeType.CONTRACT_DEFINITION)
    def visit_contract_definition(self, node: AstNode) -> None:
        if node.get("kind") == KIND_INTERFACE and not INTERFACE_NAME_PATTERN.match(_name(node)):
            self.error(node, self.MSG_MISSING_PREFIX)


class LeadingUnderscoreRule(Rule):
    """Leading underscores mark private state and private/internal functions, never constants."""

    descriptor = RuleDescriptor(rule_id="leading-underscore")

    MSG_CONSTANT = "Constant variables should not have leading underscore"
    MSG_PRIVATE_VARIABLE = "Non-constant private variables must have leading underscore"
    MSG_PRIVATE_FUNCTION = "Private and internal functions must have leading underscore"
    MSG_LIBRARY_INTERNAL_FUNCTION = "Library internal functions should not have leading underscore"

    @handles(NodeType.VARIABLE_DECLARATION)
    def visit_variable_declaration(self, node: AstNode) -> None:
        if node.get("isDeclaredConst"):
            if _has_leading_underscore(node):
                self.error(node, self.MSG_CONSTANT)
        elif node.get("visibility") == VISIBILITY_PRIVATE and not _has_leading_underscore(node):
            self.error(node, self.MSG_PRIVATE_VARIABLE)

    @handles(NodeType.FUNCTION_DEFINITION)
    def visit_function_definition(self, node: AstNode) -> None:
        visibility = node.get("visibility")
        in_library = _enclosing_kind(node) == KIND_LIBRARY

        # Independent checks, not an if/else.
        if visibility == VISIBILITY_PRIVATE or (visibility == VISIBILITY_INTERNAL and not in_library):
            if not _has_leading_underscore(node):
                self.error(node, self.MSG_PRIVATE_FUNCTION)
        if visibility == VISIBILITY_INTERNAL and in_library:
            if _has_leading_underscore(node):
                self.error(node, self.MSG_LIBRARY_INTERNAL_FUNCTION)
