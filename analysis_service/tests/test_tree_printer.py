"""Pruebas de la forma LISP del CST."""

from rustfront.domain.tree_models import Rule, Terminal, count_nodes
from rustfront.services.tree_printer import to_lisp


def test_nested_rules():
    cst = Rule(name="crate", children=(
        Rule(name="use_declaration", children=(
            Terminal(text="use"), Terminal(text="std"), Terminal(text=";"),
        )),
        Terminal(text="<EOF>"),
    ))
    assert to_lisp(cst) == "(crate (use_declaration use std ;) <EOF>)"


def test_childless_rule_prints_its_name():
    assert to_lisp(Rule(name="crate")) == "crate"


def test_terminal_whitespace_is_escaped():
    assert to_lisp(Terminal(text="a\nb\tc\rd")) == "a\\nb\\tc\\rd"


def test_parsed_program(parser):
    cst = parser.parse("use std;").tree
    lisp = to_lisp(cst)
    assert lisp.startswith("(crate ")
    assert "use_declaration" in lisp
    assert lisp.endswith(" <EOF>)")


def test_childless_rule_among_siblings():
    cst = Rule(name="call", children=(Terminal(text="f"), Rule(name="call_arguments"), Terminal(text="x")))
    assert to_lisp(cst) == "(call f call_arguments x)"


def test_deep_tree():
    cst = Terminal(text="1")
    for _ in range(3000):
        cst = Rule(name="g", children=(cst,))
    assert to_lisp(cst) == "(g " * 3000 + "1" + ")" * 3000


def test_count_nodes_on_deep_tree():
    cst = Terminal(text="1")
    for _ in range(3000):
        cst = Rule(name="g", children=(cst, Terminal(text=";")))
    assert count_nodes(cst) == 1 + 3000 * 2
