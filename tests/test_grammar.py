from pathlib import Path

import pytest

from whilelang.ast import Ass, Comp, DefinitionRun, Literal, Skip, TrueLit, While
from whilelang.errors import LexError, ParseError
from whilelang.grammar import parse_with_grammar
from whilelang.parser import parse_program
from whilelang.span import Span

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'

PROGRAMS = [
    "x := 1;",
    "xé := 1; café2 := xé + 1",
    "if x <= 5 then x := 1 else x := 0",
    "while x <= 5 do skip",
    "x := 5; while x <= 100 x := x + 1",
    "((((while (x <= 5) do ((skip))))))",
    "(while ((x) <= (5)) do (skip))",
    "while true do (skip); skip",
    "(while true do skip); skip",
    "if true then (skip); skip else skip",
    "a := 1; b := 2; c := 3",
    ";;\nskip;\n",
    "x := 1\ny := 2\n",
    "x := a < b & c >= d & !(e > f) & g != h",
    "x := 1 + 2 * 3 - -4 * (5 - y)",
    "p := [[x := 1; y := 2]]; p",
    "p := while 0 < n do n := n - 1",
    "if a = b then (if c then skip else skip) else skip",
]


@pytest.mark.parametrize("source", PROGRAMS)
def test_grammar_matches_recursive_descent(source):
    assert parse_with_grammar(source) == parse_program(source)


@pytest.mark.parametrize("name", ["gcd", "factorial", "definitions", "count"])
def test_grammar_parses_examples(name):
    source = (EXAMPLES / f"{name}.while").read_text(encoding='utf-8')
    assert parse_with_grammar(source) == parse_program(source)


def test_grammar_greediness():
    assert parse_with_grammar("while true do (skip); skip") == While(TrueLit(), Comp(Skip(), Skip()))
    assert parse_with_grammar("(while true do skip); skip") == Comp(While(TrueLit(), Skip()), Skip())


def test_grammar_definition_run():
    assert parse_with_grammar("p := skip\np") == Comp(Ass("p", Skip()), DefinitionRun("p"))


def test_grammar_unknown_character():
    with pytest.raises(LexError) as excinfo:
        parse_with_grammar("x : 1")
    assert excinfo.value.span == Span(2, 3)


def test_grammar_unexpected_token():
    with pytest.raises(ParseError) as excinfo:
        parse_with_grammar("x := 1 then")
    assert excinfo.value.span == Span(7, 11)


def test_grammar_unexpected_end():
    source = "if true then skip"
    with pytest.raises(ParseError) as excinfo:
        parse_with_grammar(source)
    assert excinfo.value.span == Span(len(source), len(source) + 1)


def test_grammar_equality_does_not_chain():
    with pytest.raises(ParseError):
        parse_with_grammar("x := a = b = c")


def test_grammar_literal_out_of_range():
    with pytest.raises(ParseError) as excinfo:
        parse_with_grammar("x := 2147483648")
    assert excinfo.value.span == Span(5, 15)
    assert parse_with_grammar("x := 7") == Ass("x", Literal(7))
