"""Unit tests for the rule base contract."""

import unittest
from unittest.mock import MagicMock

import pytest

from solidity_style_linter.domain.ast import AstNode, NodeType
from solidity_style_linter.domain.entities import RuleDescriptor
from solidity_style_linter.domain.exceptions import RuleDeclarationError
from solidity_style_linter.domain.ignore_policy import IgnorePolicy
from solidity_style_linter.domain.rules import (
    Rule,
    RuleContext,
    handles,
    report_if_not_ignored,
    validate_descriptor,
)


class EchoRule(Rule):
    descriptor = RuleDescriptor(rule_id="echo")

    @handles(NodeType.CONTRACT_DEFINITION, "EventDefinition")
    def visit_named(self, node):
        self.error(node, f"saw {node.get('name')}")


class GlobalEchoRule(EchoRule):
    descriptor = RuleDescriptor(rule_id="global-echo", is_global=True)


class ExtendedEchoRule(EchoRule):
    descriptor = RuleDescriptor(rule_id="extended-echo")

    @handles("Block")
    def visit_block(self, node):
        self.error(node, "block")


class NoDescriptorRule(Rule):
    pass


class EmptyIdRule(Rule):
    descriptor = RuleDescriptor(rule_id="")


FILE_NAMES = ["contracts/A.sol", "test/A.t.sol", "test\\unit\\A.sol", "A.sol"]
CONFIGS = [None, {}, {"anything": True}]


@pytest.mark.parametrize("rule_cls", [NoDescriptorRule, EmptyIdRule])
@pytest.mark.parametrize("file_name", FILE_NAMES)
@pytest.mark.parametrize("config", CONFIGS)
def test_construction_fails_without_rule_id(rule_cls, file_name, config) -> None:
    with pytest.raises(RuleDeclarationError):
        rule_cls.create(MagicMock(), config, "", file_name)


def test_direct_construction_also_validates() -> None:
    context = RuleContext(reporter=MagicMock(), rule_id="x", ignored=False)
    with pytest.raises(RuleDeclarationError):
        NoDescriptorRule(context)


@pytest.mark.parametrize("file_name", ["test/A.sol", "test/deep/dir/B.t.sol", "./test/C.sol", "test\\D.sol"])
def test_ignored_file_never_reaches_reporter(file_name) -> None:
    reporter = MagicMock()
    rule = EchoRule.create(reporter, None, "", file_name)

    rule.error(AstNode("Block"), "anything")
    rule.visit(AstNode(NodeType.CONTRACT_DEFINITION, {"name": "A"}))

    assert rule.ignored is True
    assert reporter.mock_calls == []


@pytest.mark.parametrize("file_name", ["test/A.sol", "contracts/A.sol", "src/test/A.sol"])
def test_global_rule_always_reports(file_name) -> None:
    reporter = MagicMock()
    rule = GlobalEchoRule.create(reporter, None, "", file_name)
    node = AstNode("Block")

    rule.error(node, "message")

    assert rule.ignored is False
    reporter.error.assert_called_once_with(node, "global-echo", "message")


class TestRuleInstance(unittest.TestCase):
    def setUp(self) -> None:
        self.reporter = MagicMock()
        self.rule = EchoRule.create(self.reporter, {"key": "value"}, "contract A {}", "contracts/A.sol")

    def test_context_holds_file_state(self) -> None:
        self.assertEqual(self.rule.rule_id, "echo")
        self.assertFalse(self.rule.ignored)
        self.assertIs(self.rule.reporter, self.reporter)
        self.assertEqual(self.rule.context.file_name, "contracts/A.sol")
        self.assertEqual(self.rule.context.source, "contract A {}")
        self.assertEqual(self.rule.context.config["key"], "value")

    def test_config_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            self.rule.context.config["key"] = "other"

    def test_error_forwards_exactly_node_rule_id_message(self) -> None:
        node = AstNode("Block")
        self.rule.error(node, "message")
        self.reporter.error.assert_called_once_with(node, "echo", "message")

    def test_visit_dispatches_on_node_type(self) -> None:
        node = AstNode(NodeType.CONTRACT_DEFINITION, {"name": "A"})
        self.assertTrue(self.rule.visit(node))
        self.reporter.error.assert_called_once_with(node, "echo", "saw A")

    def test_one_handler_for_several_types(self) -> None:
        self.assertEqual(self.rule.handler_for("EventDefinition"), self.rule.visit_named)
        self.assertEqual(self.rule.handler_for(NodeType.CONTRACT_DEFINITION), self.rule.visit_named)

    def test_unhandled_node_type_is_not_an_error(self) -> None:
        self.assertIsNone(self.rule.handler_for(NodeType.FUNCTION_DEFINITION))
        self.assertFalse(self.rule.visit(AstNode("SomethingUnknown")))
        self.reporter.error.assert_not_called()

    def test_subclass_extends_handler_table(self) -> None:
        self.assertEqual(
            ExtendedEchoRule.handled_node_types(),
            frozenset({"ContractDefinition", "EventDefinition", "Block"}),
        )
        self.assertEqual(EchoRule.handled_node_types(), frozenset({"ContractDefinition", "EventDefinition"}))

    def test_instances_are_per_file(self) -> None:
        ignored = EchoRule.create(self.reporter, None, "", "test/A.sol")
        self.assertTrue(ignored.ignored)
        self.assertFalse(self.rule.ignored)


class TestReportIfNotIgnored(unittest.TestCase):
    def test_ignored_context_has_no_side_effect(self) -> None:
        reporter = MagicMock()
        context = RuleContext(reporter=reporter, rule_id="r", ignored=True)
        report_if_not_ignored(context, object(), "message")
        self.assertEqual(reporter.mock_calls, [])

    def test_reporter_failure_does_not_propagate(self) -> None:
        reporter = MagicMock()
        reporter.error.side_effect = RuntimeError("sink is down")
        context = RuleContext(reporter=reporter, rule_id="r", ignored=False)
        with self.assertLogs("solidity_style_linter.domain.rules", level="ERROR"):
            report_if_not_ignored(context, "node", "message")
        reporter.error.assert_called_once_with("node", "r", "message")

    def test_for_file_uses_given_policy(self) -> None:
        policy = IgnorePolicy(patterns=("vendor/**/*.sol",))
        descriptor = RuleDescriptor(rule_id="r")
        self.assertTrue(RuleContext.for_file(descriptor, MagicMock(), None, "", "vendor/oz/A.sol", policy).ignored)
        self.assertFalse(RuleContext.for_file(descriptor, MagicMock(), None, "", "test/A.sol", policy).ignored)


class TestValidateDescriptor(unittest.TestCase):
    def test_returns_descriptor(self) -> None:
        self.assertEqual(validate_descriptor(GlobalEchoRule), RuleDescriptor("global-echo", is_global=True))

    def test_rejects_non_descriptor(self) -> None:
        class BadRule(Rule):
            descriptor = "bad"  # type: ignore[assignment]

        with self.assertRaises(RuleDeclarationError):
            validate_descriptor(BadRule)
