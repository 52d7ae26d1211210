"""
Abstract Syntax Tree node definitions for prerequisite expressions.

Nodes are frozen dataclasses: a parse produces a value, not an object
graph, so there are no parent pointers and trees compare by structure.
"""

from abc import ABC
from typing import Any, Iterator, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum


class ASTNodeType(Enum):
    """Enumeration of all expression node types."""
    COURSE = "Course"
    GROUP = "Group"
    AND = "And"
    OR = "Or"
    FREEFORM = "Freeform"


class Expression(ABC):
    """Base class for all prerequisite expression nodes."""

    node_type: ASTNodeType

    def accept(self, visitor: 'ExpressionVisitor') -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def children(self) -> Tuple['Expression', ...]:
        """Get all direct child nodes."""
        return ()


@dataclass(frozen=True)
class Course(Expression):
    """A course reference, e.g. ``CS 101 with a minimum grade of C``."""
    code: str
    grade: str = ""

    node_type = ASTNodeType.COURSE


@dataclass(frozen=True)
class Group(Expression):
    """A parenthesized sub-expression with its own optional grade clause."""
    inner: Expression
    grade: str = ""

    node_type = ASTNodeType.GROUP

    def children(self) -> Tuple[Expression, ...]:
        return (self.inner,)


@dataclass(frozen=True)
class _Junction(Expression):
    """Shared shape of And/Or: two or more ordered operands."""
    operands: Tuple[Expression, ...]

    def __post_init__(self):
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "operands", tuple(self.operands))
        if len(self.operands) < 2:
            raise ValueError(
                f"{type(self).__name__} needs at least 2 operands, got {len(self.operands)}"
            )

    def children(self) -> Tuple[Expression, ...]:
        return self.operands


@dataclass(frozen=True)
class And(_Junction):
    """Conjunction: every operand is required."""

    node_type = ASTNodeType.AND


@dataclass(frozen=True)
class Or(_Junction):
    """Disjunction: any one operand satisfies the requirement."""

    node_type = ASTNodeType.OR


@dataclass(frozen=True)
class Freeform(Expression):
    """Text the grammar could not classify, e.g. ``permission of instructor``."""
    text: str

    node_type = ASTNodeType.FREEFORM


def collapse(kind: type, operands: Sequence[Expression]) -> Expression:
    """
    Build an And/Or node, or return the single operand unwrapped.

    This is the only place that decides whether a junction node is created,
    so there is never a one-child And/Or in a tree.
    """
    if not operands:
        raise ValueError("cannot build an expression from zero operands")
    if len(operands) == 1:
        return operands[0]
    return kind(tuple(operands))


def make_and(operands: Sequence[Expression]) -> Expression:
    return collapse(And, operands)


def make_or(operands: Sequence[Expression]) -> Expression:
    return collapse(Or, operands)


def walk(node: Expression) -> Iterator[Expression]:
    """Yield ``node`` and all of its descendants, depth first, pre-order."""
    yield node
    for child in node.children():
        yield from walk(child)


class ExpressionVisitor:
    """
    Visitor that dispatches on node type to ``visit_<type>`` methods.

    Subclasses override the methods for the node types they care about;
    anything else falls through to ``generic_visit``.
    """

    def visit(self, node: Expression) -> Any:
        method = getattr(self, f"visit_{node.node_type.value.lower()}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: Expression) -> Any:
        raise NotImplementedError(f"{type(self).__name__} cannot visit {node.node_type.value}")
