"""
Serialization of expression trees.

The nested-object form is the one the prerequisite graph builders
consume:

    Course    {"course": "CS 101", "grade": ""}
    Group     {"courses": <expr>, "grade": ""}
    And       {"and": [<expr>, <expr>, ...]}
    Or        {"or": [<expr>, <expr>, ...]}
    Freeform  {"course": "permission of instructor", "type": "special"}
"""

import json
from typing import Any, Dict, Optional

from .parser.ast_nodes import (
    Expression, Course, Group, And, Or, Freeform, ExpressionVisitor
)

FREEFORM_TYPE = "special"


class _DictBuilder(ExpressionVisitor):

    def visit_course(self, node: Course) -> Dict[str, Any]:
        return {"course": node.code, "grade": node.grade}

    def visit_group(self, node: Group) -> Dict[str, Any]:
        return {"courses": self.visit(node.inner), "grade": node.grade}

    def visit_and(self, node: And) -> Dict[str, Any]:
        return {"and": [self.visit(operand) for operand in node.operands]}

    def visit_or(self, node: Or) -> Dict[str, Any]:
        return {"or": [self.visit(operand) for operand in node.operands]}

    def visit_freeform(self, node: Freeform) -> Dict[str, Any]:
        return {"course": node.text, "type": FREEFORM_TYPE}


class _TextRenderer(ExpressionVisitor):

    def visit_course(self, node: Course) -> str:
        return _with_grade(node.code, node.grade)

    def visit_group(self, node: Group) -> str:
        return _with_grade(f"({self.visit(node.inner)})", node.grade)

    def visit_and(self, node: And) -> str:
        return " and ".join(self.visit(operand) for operand in node.operands)

    def visit_or(self, node: Or) -> str:
        return " or ".join(self.visit(operand) for operand in node.operands)

    def visit_freeform(self, node: Freeform) -> str:
        return node.text


def _with_grade(text: str, grade: str) -> str:
    return f"{text} {grade}" if grade else text


def to_dict(expr: Expression) -> Dict[str, Any]:
    """Convert a tree to its nested-object form."""
    return expr.accept(_DictBuilder())


def from_dict(data: Dict[str, Any]) -> Expression:
    """
    Rebuild a tree from its nested-object form.

    Raises:
        ValueError: If ``data`` is not a well-formed serialized expression
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")

    if "and" in data or "or" in data:
        key = "and" if "and" in data else "or"
        operands = data[key]
        if not isinstance(operands, list):
            raise ValueError(f"'{key}' must hold a list")
        node_class = And if key == "and" else Or
        return node_class(tuple(from_dict(operand) for operand in operands))

    if "courses" in data:
        return Group(from_dict(data["courses"]), _grade_of(data))

    if "course" in data:
        text = data["course"]
        if not isinstance(text, str):
            raise ValueError("'course' must be a string")
        if data.get("type") == FREEFORM_TYPE:
            return Freeform(text)
        return Course(text, _grade_of(data))

    raise ValueError(f"unrecognized expression object with keys {sorted(data)}")


def _grade_of(data: Dict[str, Any]) -> str:
    grade = data.get("grade", "")
    if not isinstance(grade, str):
        raise ValueError("'grade' must be a string")
    return grade


def dumps(expr: Expression, indent: Optional[int] = None) -> str:
    """Serialize a tree to JSON text."""
    return json.dumps(to_dict(expr), indent=indent)


def loads(text: str) -> Expression:
    """Rebuild a tree from JSON text produced by ``dumps``."""
    return from_dict(json.loads(text))


def to_text(expr: Expression) -> str:
    """
    Render a tree back into prerequisite text.

    For any tree returned by ``parse`` the result parses to an equal tree.
    Hand-built trees that nest And directly under Or (or a junction directly
    under the same kind) have no parenthesis-free spelling and will not
    round-trip.
    """
    return expr.accept(_TextRenderer())
