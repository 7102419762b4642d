from inkcore.spans import Span, intersection, line_range_at


def test_line_range_includes_terminator():
    text = "a\nbc\n"
    assert line_range_at(text, 0) == Span(0, 2)
    assert line_range_at(text, 1) == Span(0, 2)
    assert line_range_at(text, 3) == Span(2, 5)


def test_line_range_at_document_end():
    assert line_range_at("# Hello", 7) == Span(0, 7)
    assert line_range_at("a\n", 2) == Span(2, 2)
    assert line_range_at("abc", 99) == Span(0, 3)


def test_overlap_needs_shared_characters():
    assert Span(0, 3).overlaps(Span(2, 5))
    assert not Span(0, 3).overlaps(Span(3, 5))
    assert not Span(0, 3).overlaps(Span(3, 3))
    assert intersection(Span(0, 2), Span(5, 9)).length == 0


def test_line_range_keeps_crlf_together():
    text = "# Hi\r\nbody"
    assert line_range_at(text, 4) == Span(0, 6)
    assert line_range_at(text, 6) == Span(6, 10)
