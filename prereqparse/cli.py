"""
Command line front-end for prerequisite parsing.

    prereqparse "CS 101 and (CS 102 or CS 103)"
    cat prereqs.txt | prereqparse --format tree
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.tree import Tree

from . import __version__
from .api import parse
from .lexer.errors import PrereqParseError
from .parser.ast_nodes import Expression, ExpressionVisitor, Course, Group, And, Or, Freeform
from .serialize import dumps, to_text


class _RichTreeBuilder(ExpressionVisitor):
    """Adds one rich.tree branch per expression node."""

    def __init__(self, root: Tree):
        self.parent = root

    def _branch(self, label: str, node: Expression):
        saved = self.parent
        self.parent = self.parent.add(label)
        for child in node.children():
            self.visit(child)
        self.parent = saved

    def visit_course(self, node: Course):
        self.parent.add(_grade_label(f"[bold]{escape(node.code)}[/bold]", node.grade))

    def visit_group(self, node: Group):
        self._branch(_grade_label("[cyan]group[/cyan]", node.grade), node)

    def visit_and(self, node: And):
        self._branch("[green]all of[/green]", node)

    def visit_or(self, node: Or):
        self._branch("[yellow]one of[/yellow]", node)

    def visit_freeform(self, node: Freeform):
        self.parent.add(f"[magenta]text[/magenta] {escape(repr(node.text))}")


def _grade_label(label: str, grade: str) -> str:
    return f"{label} [dim]({escape(grade)})[/dim]" if grade else label


def render(console: Console, text: str, expr: Expression, output_format: str):
    if output_format == "json":
        console.print(Syntax(dumps(expr, indent=2), "json"))
    elif output_format == "tree":
        root = Tree(escape(text), highlight=False)
        _RichTreeBuilder(root).visit(expr)
        console.print(root)
    else:
        console.print(to_text(expr), markup=False, highlight=False)


@click.command()
@click.argument("texts", nargs=-1)
@click.option("--format", "output_format", type=click.Choice(["json", "tree", "text"]),
              default="json", show_default=True, help="How to print each tree.")
@click.option("-v", "--verbose", is_flag=True, help="Log lexer and parser activity.")
@click.version_option(__version__, prog_name="prereqparse")
def main(texts, output_format, verbose):
    """Parse prerequisite TEXTS (or stdin lines) into expression trees."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console = Console()
    errors = Console(stderr=True)

    if not texts:
        texts = [line.rstrip("\n") for line in sys.stdin if line.strip()]

    failed = 0
    for index, text in enumerate(texts, start=1):
        try:
            expr = parse(text, source=f"<input {index}>")
        except PrereqParseError as e:
            failed += 1
            errors.print(text, markup=False, highlight=False)
            errors.print(str(e), markup=False, highlight=False, style="red")
            continue
        render(console, text, expr, output_format)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
