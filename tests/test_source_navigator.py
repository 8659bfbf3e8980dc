from whilelang.source_navigator import FilePos2d, SourceNavigator
from whilelang.span import Span


def test_get_position():
    nav = SourceNavigator("skip\nx := 1\n\nskip")
    assert nav.get_position(0) == FilePos2d(0, 0)
    assert nav.get_position(3) == FilePos2d(0, 3)
    assert nav.get_position(5) == FilePos2d(1, 0)
    assert nav.get_position(10) == FilePos2d(1, 5)
    assert nav.get_position(12) == FilePos2d(2, 0)
    assert nav.get_position(13) == FilePos2d(3, 0)


def test_get_line_trims():
    nav = SourceNavigator("skip\r\n   x := 1  \nskip")
    assert nav.get_line(0) == "skip"
    assert nav.get_line(1) == "x := 1"
    assert nav.get_line(2) == "skip"


def test_annotated_span_single_character():
    nav = SourceNavigator("x : 1")
    assert nav.get_annotated_span(Span(2, 3)) == "1 | x : 1\n      ^"


def test_annotated_span_on_indented_line():
    source = "x := 1\n  y := 1 ? 2"
    nav = SourceNavigator(source)
    start = source.index('?')
    assert nav.get_annotated_span(Span(start, start + 1)) == "2 | y := 1 ? 2\n           ^"


def test_annotated_span_width():
    nav = SourceNavigator("x := 1 then")
    assert nav.get_annotated_span(Span(7, 11)) == "1 | x := 1 then\n           ^~~~"


def test_annotated_span_is_clipped_to_its_line():
    nav = SourceNavigator("skip\nskip")
    assert nav.get_annotated_span(Span(0, 100)) == "1 | skip\n    ^~~~"


def test_annotated_end_of_input():
    source = "if true then skip"
    nav = SourceNavigator(source)
    annotated = nav.get_annotated_span(Span(len(source), len(source) + 1))
    assert annotated == "1 | if true then skip\n" + " " * (4 + len(source)) + "^"


def test_end_of_input_after_trailing_newlines():
    source = "if true then skip\n\n"
    nav = SourceNavigator(source)
    annotated = nav.get_annotated_span(Span(len(source), len(source) + 1))
    assert annotated == "1 | if true then skip\n" + " " * (4 + len("if true then skip")) + "^"
