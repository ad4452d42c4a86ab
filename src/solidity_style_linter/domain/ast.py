"""Solidity AST nodes as consumed by the rules.

Nodes are built from the JSON the parser emits: every node is a mapping with
a ``type`` key, and child nodes appear as mapping values or lists of them.
"""

import weakref
from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Union

from solidity_style_linter.domain.exceptions import DetachedNodeError, MalformedNodeError


class NodeType(str, Enum):
    """Node types the shipped rules refer to. Values match the parser's ``type``.

    The set is open: any other parser type string is accepted wherever a
    ``NodeType`` is, and handlers may be registered against it directly.
    """

    SOURCE_UNIT = "SourceUnit"
    CONTRACT_DEFINITION = "ContractDefinition"
    VARIABLE_DECLARATION = "VariableDeclaration"
    FUNCTION_DEFINITION = "FunctionDefinition"


def node_type_value(node_type: Union[NodeType, str]) -> str:
    """Plain string form of a node type, usable as a dict key for both enum and str input."""
    if isinstance(node_type, NodeType):
        return node_type.value
    return str(node_type)


class AstNode:
    """A parsed node with its attributes, children and a non-owning parent link."""

    def __init__(
        self,
        node_type: Union[NodeType, str],
        attributes: Optional[Mapping[str, Any]] = None,
        parent: Optional["AstNode"] = None,
    ) -> None:
        self.type: str = node_type_value(node_type)
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self.children: List["AstNode"] = []
        if parent is not None:
            parent.children.append(self)

    @property
    def parent(self) -> Optional["AstNode"]:
        """The enclosing node, or None for a root.

        Raises DetachedNodeError when the node had a parent that has since
        been released, so a lost parent is never mistaken for a root.
        """
        if self._parent_ref is None:
            return None
        parent = self._parent_ref()
        if parent is None:
            raise DetachedNodeError(f"Parent of {self!r} was released; keep the tree root alive while visiting")
        return parent

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __repr__(self) -> str:
        name = self._attributes.get("name")
        if name is None:
            return f"AstNode({self.type})"
        return f"AstNode({self.type}, name={name!r})"

    def iter_children(self) -> Iterator["AstNode"]:
        return iter(self.children)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], parent: Optional["AstNode"] = None) -> "AstNode":
        """Build a linked tree from parser output.

        Uses an explicit work stack, so nesting depth is not bounded by the
        interpreter's recursion limit. The caller must keep the returned root
        alive for as long as parent links are needed; children only hold weak
        references upward.
        """
        if not _is_node_mapping(data):
            raise MalformedNodeError(f"Expected a mapping with a 'type' key, got {data!r}")

        root = cls(data["type"], parent=parent)
        pending = [(root, data)]
        while pending:
            node, raw = pending.pop()
            for key, value in raw.items():
                if key == "type":
                    continue
                if _is_node_mapping(value):
                    child = cls(value["type"], parent=node)
                    pending.append((child, value))
                    node._attributes[key] = child
                elif isinstance(value, list) and any(_is_node_mapping(item) for item in value):
                    converted = []
                    for item in value:
                        if _is_node_mapping(item):
                            child = cls(item["type"], parent=node)
                            pending.append((child, item))
                            converted.append(child)
                        else:
                            converted.append(item)
                    node._attributes[key] = converted
                else:
                    node._attributes[key] = value
        return root


def _is_node_mapping(value: Any) -> bool:
    return isinstance(value, Mapping) and "type" in value
