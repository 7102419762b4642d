import pytest
from prompt_toolkit.document import Document
from prompt_toolkit.layout.processors import TransformationInput

from inkcore.session import EditorSession
from inkcore.spans import Span
from inkcore.styles import BACKGROUND, FONT, FOREGROUND, UNDERLINE, Color, Font, Theme
from inkcore.terminal import (
    HIDDEN_CLASS, BlockPaintProcessor, HiddenMarkupProcessor, LiveMarkdownLexer,
    TerminalGeometry, to_style_string,
)


def transformation_input(document, lineno, fragments, width=20):
    return TransformationInput(None, document, lineno, lambda i: i, fragments, width, 1)


def test_style_string_mapping():
    assert to_style_string(Theme().hidden_attributes()) == HIDDEN_CLASS
    assert to_style_string({FONT: Font(32, 'bold'), FOREGROUND: Color('text')}) == 'class:md.heading bold'
    assert to_style_string({FONT: Font(14, 'medium', 'monospace'), FOREGROUND: Color('pink'),
                            BACKGROUND: Color('gray', 0.15)}) == 'class:md.code class:md.fg.pink class:md.bg.gray'
    assert to_style_string({FOREGROUND: Color('blue'), UNDERLINE: True}) == 'class:md.fg.blue underline'


def test_lexer_emits_rendered_line():
    session = EditorSession()
    lexer = LiveMarkdownLexer(session)
    document = Document("# Hello\n\nBody", cursor_position=12)

    get_line = lexer.lex_document(document)

    assert session.get_text() == document.text
    assert get_line(0) == [(HIDDEN_CLASS, '# '), ('class:md.heading bold', 'Hello')]
    assert get_line(1) == []
    assert "".join(text for _, text in get_line(2)) == "Body"
    assert get_line(7) == []


def test_lexer_substitutes_bullet_glyph():
    session = EditorSession("- item\nnext")
    session.on_selection_changed(9)
    get_line = LiveMarkdownLexer(session).lex_document(Document(session.get_text(), 9))

    assert get_line(0)[0] == ('class:md.fg.blue', '•')


def test_lexer_hash_changes_with_active_line():
    session = EditorSession("a\nb")
    lexer = LiveMarkdownLexer(session)
    before = lexer.invalidation_hash()

    session.on_selection_changed(1)
    assert lexer.invalidation_hash() == before

    session.on_selection_changed(3)
    assert lexer.invalidation_hash() != before

    lexer.refresh()
    assert lexer.invalidation_hash() != before


def test_lexer_marks_misspelled_words_away_from_cursor():
    session = EditorSession("teh cat\nteh")
    lexer = LiveMarkdownLexer(session, misspelled=lambda word: word == 'teh')
    get_line = lexer.lex_document(Document(session.get_text(), 10))

    assert ('class:spell-error', 'teh') in get_line(0)
    assert ('', 'teh') in get_line(1)


def test_hidden_processor_drops_markup_and_maps_cursor():
    fragments = [(HIDDEN_CLASS, '**'), ('bold', 'b'), (HIDDEN_CLASS, '**')]
    ti = transformation_input(Document("**b**"), 0, fragments)

    result = HiddenMarkupProcessor().apply_transformation(ti)

    assert "".join(f[1] for f in result.fragments) == "b"
    assert result.source_to_display(2) == 0
    assert result.source_to_display(5) == 1
    assert result.display_to_source(0) == 2


def test_terminal_geometry_rows_and_columns():
    document = Document("ab\n```\nx\n```\n---")
    geometry = TerminalGeometry(document, 40)

    assert geometry.bounding_rect(Span(3, 12)).y == 1
    assert geometry.bounding_rect(Span(3, 12)).height == 3
    assert geometry.bounding_rect(Span(13, 16)) == (0, 4, 3, 1)
    assert geometry.bounding_rect(Span(13, 99)) is None


@pytest.fixture
def code_session():
    return EditorSession("text\n```\ncode\n```\nend")


def test_block_processor_fills_code_lines(code_session):
    document = Document(code_session.get_text())
    processor = BlockPaintProcessor(code_session)

    result = processor.apply_transformation(transformation_input(document, 2, [('', 'code')]))

    assert sum(len(f[1]) for f in result.fragments) == 20
    assert all(f[0].endswith('class:md.code-block-dark') for f in result.fragments)

    outside = processor.apply_transformation(transformation_input(document, 0, [('', 'text')]))
    assert outside.fragments == [('', 'text')]


def test_block_processor_strokes_hidden_rules():
    session = EditorSession("intro\n---\nafter")
    document = Document(session.get_text())
    processor = BlockPaintProcessor(session)

    hidden = processor.apply_transformation(transformation_input(document, 1, [], width=10))
    assert hidden.fragments == [('class:md.rule', '─' * 10)]

    raw = processor.apply_transformation(transformation_input(document, 1, [('', '---')], width=10))
    assert raw.fragments == [('', '---')]
