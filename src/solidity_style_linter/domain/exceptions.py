"""Exceptions raised by the rule engine."""


class SolidityStyleLinterError(Exception):
    """Base class for all engine errors."""


class RuleDeclarationError(SolidityStyleLinterError):
    """A rule kind is declared incorrectly (missing, empty or duplicate rule id).

    This is a defect in the rule's own definition. It is raised before any
    node is visited and is never turned into a diagnostic.
    """


class MalformedNodeError(SolidityStyleLinterError):
    """Parser output could not be turned into an AST node."""


class DetachedNodeError(SolidityStyleLinterError):
    """A node's parent was released while the node is still in use.

    Parent links do not keep the tree alive; hold the root for as long as
    its nodes are visited.
    """
