"""
Prerequisite Parser Package

Recursive descent parser that turns prerequisite tokens into an immutable
expression tree of courses, groups, conjunctions, disjunctions and
free-text fallback nodes.
"""

from .ast_nodes import (
    ASTNodeType, Expression, Course, Group, And, Or, Freeform,
    collapse, make_and, make_or, walk, ExpressionVisitor
)
from .parser import Parser, parse_tokens
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "parse_tokens",

    # AST nodes
    "ASTNodeType", "Expression",
    "Course", "Group", "And", "Or", "Freeform",
    "collapse", "make_and", "make_or", "walk", "ExpressionVisitor",

    # Error handling
    "ParseError",
]
