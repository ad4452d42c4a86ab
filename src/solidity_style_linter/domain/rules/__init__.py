"""Rule base contract: per-file context, guarded reporting and node-type dispatch."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Union

from solidity_style_linter.domain.ast import AstNode, NodeType, node_type_value
from solidity_style_linter.domain.entities import RuleDescriptor
from solidity_style_linter.domain.exceptions import RuleDeclarationError
from solidity_style_linter.domain.ignore_policy import DEFAULT_IGNORE_POLICY, IgnorePolicy
from solidity_style_linter.domain.protocols import ReporterProtocol

logger = logging.getLogger(__name__)

_HANDLED_TYPES_ATTR = "_handles_node_types"


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule instance knows about the file it was created for."""

    reporter: ReporterProtocol
    rule_id: str
    ignored: bool
    file_name: str = ""
    source: str = ""
    config: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def for_file(
        cls,
        descriptor: RuleDescriptor,
        reporter: ReporterProtocol,
        config: Optional[Mapping[str, Any]],
        source: str,
        file_name: str,
        ignore_policy: IgnorePolicy = DEFAULT_IGNORE_POLICY,
    ) -> "RuleContext":
        """Resolve the ignore state of ``descriptor`` for ``file_name``."""
        ignored = False if descriptor.is_global else ignore_policy.matches(file_name)
        if ignored:
            logger.debug("Rule %s ignored for %s", descriptor.rule_id, file_name)
        return cls(
            reporter=reporter,
            rule_id=descriptor.rule_id,
            ignored=ignored,
            file_name=file_name,
            source=source,
            config=MappingProxyType(dict(config or {})),
        )


def report_if_not_ignored(context: RuleContext, node: Any, message: str) -> None:
    """Forward ``(node, rule_id, message)`` to the reporter unless the rule is ignored for this file."""
    if context.ignored:
        return
    try:
        context.reporter.error(node, context.rule_id, message)
    except Exception:
        logger.exception("Reporter failed on %s from rule %s", node, context.rule_id)


def handles(*node_types: Union[NodeType, str]) -> Callable[[Callable[..., None]], Callable[..., None]]:
    """Register the decorated method as the handler for ``node_types``."""

    def decorator(func: Callable[..., None]) -> Callable[..., None]:
        existing = getattr(func, _HANDLED_TYPES_ATTR, ())
        setattr(func, _HANDLED_TYPES_ATTR, existing + tuple(node_type_value(t) for t in node_types))
        return func

    return decorator


def validate_descriptor(rule_cls: type) -> RuleDescriptor:
    """Return the descriptor of ``rule_cls`` or raise RuleDeclarationError."""
    descriptor = getattr(rule_cls, "descriptor", None)
    if not isinstance(descriptor, RuleDescriptor):
        raise RuleDeclarationError(f"{rule_cls.__name__} is missing a rule descriptor")
    if not descriptor.rule_id:
        raise RuleDeclarationError(f"{rule_cls.__name__} is missing a rule id")
    return descriptor


class Rule:
    """Base for rule kinds.

    Subclasses set ``descriptor`` and mark handler methods with
    :func:`handles`. One instance exists per (rule kind, file); it must not be
    reused for another file because its ignore state is file specific.
    """

    descriptor: ClassVar[Optional[RuleDescriptor]] = None
    _handlers: ClassVar[Dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        handlers = dict(cls._handlers)
        for attr_name, value in vars(cls).items():
            for node_type in getattr(value, _HANDLED_TYPES_ATTR, ()):
                handlers[node_type] = attr_name
        cls._handlers = handlers

    def __init__(self, context: RuleContext) -> None:
        validate_descriptor(type(self))
        self.context = context

    @classmethod
    def create(
        cls,
        reporter: ReporterProtocol,
        config: Optional[Mapping[str, Any]],
        source: str,
        file_name: str,
    ) -> "Rule":
        """Construct an instance for one file, as the host does before traversal."""
        descriptor = validate_descriptor(cls)
        return cls(RuleContext.for_file(descriptor, reporter, config, source, file_name))

    @classmethod
    def handled_node_types(cls) -> frozenset[str]:
        return frozenset(cls._handlers)

    @property
    def rule_id(self) -> str:
        return self.context.rule_id

    @property
    def ignored(self) -> bool:
        return self.context.ignored

    @property
    def reporter(self) -> ReporterProtocol:
        return self.context.reporter

    def error(self, node: Any, message: str) -> None:
        report_if_not_ignored(self.context, node, message)

    def handler_for(self, node_type: Union[NodeType, str]) -> Optional[Callable[[AstNode], None]]:
        attr_name = self._handlers.get(node_type_value(node_type))
        if attr_name is None:
            return None
        return getattr(self, attr_name)

    def visit(self, node: AstNode) -> bool:
        """Run the handler registered for ``node.type``. Returns False when there is none."""
        handler = self.handler_for(node.type)
        if handler is None:
            return False
        handler(node)
        return True
