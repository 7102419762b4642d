import logging
import pytest
from unittest.mock import MagicMock
from prompt_toolkit.keys import Keys

import inkline
from inkline import InklineEditor, extract_title, ghost_style, inkline_style
from inkcore.assets import HELP_TEXT


def press(editor, key):
    """Runs the editor's own handler for ``key`` with a fake app event."""
    [binding] = editor.kb.get_bindings_for_keys((key,))
    event = MagicMock()
    binding.handler(event)
    return event


def test_title_comes_from_first_h1():
    markdown = "intro line\n## Sub\n  # Real Title  \n# Later"
    assert extract_title(markdown) == "Real Title"
    assert extract_title("no headers here") is None


def test_ghost_mode_hotkey_swaps_style_and_gutter():
    editor = InklineEditor(test_mode=True)

    event = press(editor, Keys.ControlT)

    assert editor.ghost_mode_enabled
    assert event.app.style is ghost_style
    assert editor.body_field.line_numbers is False
    assert editor.body_field.scrollbar is False

    event = press(editor, Keys.ControlT)

    assert not editor.ghost_mode_enabled
    assert event.app.style is inkline_style
    assert editor.body_field.line_numbers is True


def test_write_without_a_path_reports_it():
    editor = InklineEditor(test_mode=True)
    editor.current_path = None

    assert editor.export_markdown(editor.current_path) is False
    assert "No file" in editor.status_report


def test_config_warnings_reach_the_log_file(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "config.json").write_text("{not json", encoding='utf-8')
    monkeypatch.setattr(inkline, "CONFIG_DIR", str(config_dir))
    root = logging.getLogger()
    level = root.level

    editor = inkline.start_editor(test_mode=True)
    try:
        assert editor.lang == "en"
        assert "Unreadable config" in (config_dir / "inkline.log").read_text(encoding='utf-8')
    finally:
        for handler in root.handlers[:]:
            if getattr(handler, 'baseFilename', '').startswith(str(tmp_path)):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)


@pytest.mark.parametrize("lang", ["en", "es"])
def test_help_page_lists_every_hotkey(lang):
    for key in ("F1", "Ctrl+T", "Ctrl+D", "Ctrl+S", "Ctrl+C", "Ctrl+B", "Ctrl+G"):
        assert f"[{key}]" in HELP_TEXT[lang]
