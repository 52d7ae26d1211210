"""
Test suite for the prerequisite parser.

Tests cover:
- Tree shapes for courses, groups, junctions and free text
- "or" binding tighter than "and"
- Collapsing of single-operand junctions
- Syntax errors and their diagnostics
"""

import unittest
import random
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from prereqparse import parse, try_parse
from prereqparse.lexer.lexer import tokenize_string
from prereqparse.lexer.tokens import TokenType
from prereqparse.parser.parser import Parser, parse_tokens
from prereqparse.parser.errors import ParseError, PARSER_ERROR_CODES
from prereqparse.parser.ast_nodes import (
    Course, Group, And, Or, Freeform, make_and, make_or, walk
)


COURSES = ["CS 101", "CS 102", "MATH 2A10", "PHYS 150", "STAT 200"]
GRADES = [
    "with a minimum grade of C",
    "with a grade of B+ or better",
    "with a minimum grade of C- or higher",
]
FREEFORMS = ["permission of instructor", "junior standing", "consent of department"]


def random_prerequisite(rng: random.Random, depth: int = 0) -> str:
    """Random text that the grammar accepts."""
    ands = []
    for _ in range(rng.randint(1, 3)):
        ors = [random_atomic(rng, depth) for _ in range(rng.randint(1, 3))]
        ands.append(" or ".join(ors))
    return " and ".join(ands)


def random_atomic(rng: random.Random, depth: int) -> str:
    choice = rng.random()
    if depth < 3 and choice < 0.25:
        text = f"({random_prerequisite(rng, depth + 1)})"
    elif choice < 0.85:
        text = rng.choice(COURSES)
    else:
        return rng.choice(FREEFORMS)
    if rng.random() < 0.3:
        text += " " + rng.choice(GRADES)
    return text


class TestParser(unittest.TestCase):
    """Test cases for tree construction."""

    def test_bare_course(self):
        self.assertEqual(parse("CS 101"), Course("CS 101", ""))

    def test_course_with_grade(self):
        self.assertEqual(
            parse("CS 101 with a minimum grade of C"),
            Course("CS 101", "with a minimum grade of C"),
        )

    def test_and(self):
        self.assertEqual(
            parse("CS 101 and CS 102"),
            And((Course("CS 101"), Course("CS 102"))),
        )

    def test_or(self):
        self.assertEqual(
            parse("CS 101 or CS 102"),
            Or((Course("CS 101"), Course("CS 102"))),
        )

    def test_or_binds_tighter_than_and(self):
        self.assertEqual(
            parse("CS 101 and CS 102 or CS 103"),
            And((Course("CS 101"), Or((Course("CS 102"), Course("CS 103"))))),
        )
        self.assertEqual(
            parse("CS 101 or CS 102 and CS 103 or CS 104"),
            And((
                Or((Course("CS 101"), Course("CS 102"))),
                Or((Course("CS 103"), Course("CS 104"))),
            )),
        )

    def test_long_chains_stay_flat(self):
        result = parse("CS 101 and CS 102 and CS 103")
        self.assertIsInstance(result, And)
        self.assertEqual(len(result.operands), 3)

    def test_group_with_grade(self):
        self.assertEqual(
            parse("(CS 101 and CS 102) with a minimum grade of B"),
            Group(And((Course("CS 101"), Course("CS 102"))), "with a minimum grade of B"),
        )

    def test_single_operand_group_has_no_junction(self):
        self.assertEqual(parse("(CS 101)"), Group(Course("CS 101", ""), ""))
        self.assertEqual(parse("((CS 101))"), Group(Group(Course("CS 101"))))

    def test_freeform(self):
        self.assertEqual(
            parse("permission of instructor"),
            Freeform("permission of instructor"),
        )

    def test_freeform_wrapped_onto_two_lines(self):
        self.assertEqual(
            parse("permission of\ninstructor"),
            Freeform("permission of\ninstructor"),
        )
        self.assertEqual(
            parse("CS 101 or consent of\nthe department"),
            Or((Course("CS 101"), Freeform("consent of\nthe department"))),
        )

    def test_mixed_example(self):
        self.assertEqual(
            parse("CS 101 with a minimum grade of C or (CS 102 and MATH 201)"),
            Or((
                Course("CS 101", "with a minimum grade of C"),
                Group(And((Course("CS 102"), Course("MATH 201")))),
            )),
        )

    def test_group_grade_before_connective(self):
        self.assertEqual(
            parse("(CS 101 or CS 102) with a grade of B or better and CS 201"),
            And((
                Group(Or((Course("CS 101"), Course("CS 102"))), "with a grade of B or better"),
                Course("CS 201"),
            )),
        )

    def test_freeform_alternative(self):
        self.assertEqual(
            parse("CS 101 or permission of instructor"),
            Or((Course("CS 101"), Freeform("permission of instructor"))),
        )

    def test_commas_are_ignored(self):
        self.assertEqual(
            parse("CS 101, and CS 102"),
            And((Course("CS 101"), Course("CS 102"))),
        )

    def test_parser_accepts_tokens_directly(self):
        tokens = tokenize_string("CS 101 or CS 102")
        self.assertEqual(Parser(tokens).parse(), parse("CS 101 or CS 102"))
        self.assertEqual(parse_tokens(tokens), parse("CS 101 or CS 102"))

    def test_parser_requires_eof_terminated_tokens(self):
        tokens = tokenize_string("CS 101")[:-1]
        with self.assertRaises(ValueError):
            Parser(tokens)

    def test_random_inputs_never_produce_singleton_junctions(self):
        rng = random.Random(20240917)
        for _ in range(300):
            text = random_prerequisite(rng)
            with self.subTest(text=text):
                for node in walk(parse(text)):
                    if isinstance(node, (And, Or)):
                        self.assertGreaterEqual(len(node.operands), 2)
                    if isinstance(node, (Course, Group)):
                        self.assertIsInstance(node.grade, str)

    def test_random_inputs_never_nest_and_under_or(self):
        rng = random.Random(7)
        for _ in range(200):
            text = random_prerequisite(rng)
            with self.subTest(text=text):
                for node in walk(parse(text)):
                    if isinstance(node, Or):
                        self.assertFalse(any(isinstance(o, (And, Or)) for o in node.operands))
                    if isinstance(node, And):
                        self.assertFalse(any(isinstance(o, And) for o in node.operands))


class TestTreeShaping(unittest.TestCase):
    """Test cases for the junction helpers and node invariants."""

    def test_collapse_single_operand(self):
        course = Course("CS 101")
        self.assertIs(make_and([course]), course)
        self.assertIs(make_or([course]), course)

    def test_collapse_many_operands(self):
        operands = [Course("CS 101"), Course("CS 102")]
        self.assertEqual(make_and(operands), And(tuple(operands)))
        self.assertEqual(make_or(operands), Or(tuple(operands)))

    def test_collapse_rejects_empty(self):
        with self.assertRaises(ValueError):
            make_and([])

    def test_junction_rejects_single_operand(self):
        with self.assertRaises(ValueError):
            And((Course("CS 101"),))
        with self.assertRaises(ValueError):
            Or([])

    def test_junction_stores_tuple(self):
        node = Or([Course("CS 101"), Course("CS 102")])
        self.assertIsInstance(node.operands, tuple)
        self.assertEqual(hash(node), hash(Or((Course("CS 101"), Course("CS 102")))))

    def test_and_and_or_are_distinct(self):
        operands = (Course("CS 101"), Course("CS 102"))
        self.assertNotEqual(And(operands), Or(operands))

    def test_nodes_are_immutable(self):
        course = Course("CS 101")
        with self.assertRaises(AttributeError):
            course.grade = "with a grade of A"


class TestParseErrors(unittest.TestCase):
    """Test cases for syntax errors."""

    def assertParseError(self, text, code):
        with self.assertRaises(ParseError) as ctx:
            parse(text)
        self.assertEqual(ctx.exception.code, code)
        self.assertIn(code, PARSER_ERROR_CODES)
        return ctx.exception

    def test_unclosed_parenthesis(self):
        error = self.assertParseError("(CS 101", "P003")
        self.assertEqual(error.found.type, TokenType.EOF)
        self.assertEqual(error.expected, "')'")

    def test_unmatched_closing_parenthesis(self):
        error = self.assertParseError("CS 101)", "P004")
        self.assertEqual(error.found.type, TokenType.RIGHT_PAREN)
        self.assertEqual(error.location.offset, 6)
        self.assertEqual(error.location.column, 7)

    def test_empty_input(self):
        self.assertParseError("", "P002")
        self.assertParseError("   ", "P002")

    def test_dangling_connective(self):
        error = self.assertParseError("CS 101 and", "P002")
        self.assertEqual(error.expected, "'(' or course code or free text")

    def test_leading_connective(self):
        error = self.assertParseError("or CS 101", "P001")
        self.assertEqual(error.found.type, TokenType.OR)

    def test_missing_connective_inside_group(self):
        error = self.assertParseError("(CS 101 CS 102)", "P001")
        self.assertEqual(error.found.lexeme, "CS 102")
        self.assertEqual(error.expected, "')'")

    def test_missing_connective_at_top_level(self):
        error = self.assertParseError("junior standing (CS 101)", "P004")
        self.assertEqual(error.found.type, TokenType.LEFT_PAREN)

    def test_empty_parentheses(self):
        self.assertParseError("()", "P001")

    def test_grade_without_course(self):
        error = self.assertParseError("with a grade of B", "P001")
        self.assertEqual(error.found.type, TokenType.GRADE_CLAUSE)

    def test_diagnostic_rendering(self):
        error = self.assertParseError("(CS 101", "P003")
        rendered = str(error)
        self.assertTrue(rendered.startswith("error[P003]: Unclosed parenthesis"))
        self.assertIn("<input>:1:1", rendered)

    def test_nesting_at_the_limit_is_accepted(self):
        depth = Parser.MAX_NESTING_DEPTH
        result = parse("(" * depth + "CS 101" + ")" * depth)
        for _ in range(depth):
            self.assertIsInstance(result, Group)
            result = result.inner
        self.assertEqual(result, Course("CS 101"))

    def test_nesting_past_the_limit(self):
        text = "(" * 500 + "CS 101" + ")" * 500
        error = self.assertParseError(text, "P005")
        self.assertEqual(error.found.type, TokenType.LEFT_PAREN)
        self.assertEqual(error.location.offset, Parser.MAX_NESTING_DEPTH)
        self.assertIsNone(try_parse(text))

    def test_unbalanced_deep_nesting(self):
        self.assertParseError("(" * 500 + "CS 101", "P005")


if __name__ == "__main__":
    unittest.main()
