# Inkline
# Copyright (C) 2026 Nomagev
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.

import os, sys, time, json, re, asyncio, logging, logging.handlers
from prompt_toolkit import Application
from prompt_toolkit.enums import EditingMode
from prompt_toolkit.layout import Layout, HSplit, VSplit, Window, ConditionalContainer, DynamicContainer
from prompt_toolkit.filters import Condition
from prompt_toolkit.widgets import TextArea, Label
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.document import Document
from prompt_toolkit.styles import Style
from prompt_toolkit.application import get_app

from spellchecker import SpellChecker

from inkcore.assets import get_banner, HELP_TEXT, TRANSLATIONS, VERSION
from inkcore.engine import MarkdownRenderer
from inkcore.session import EditorSession
from inkcore.spans import Span
from inkcore.styles import Theme
from inkcore.terminal import LiveMarkdownLexer, HiddenMarkupProcessor, BlockPaintProcessor

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config')

DEFAULT_CONFIG = {
    "language": "en",
    "word_goal": 500,
    "reading_speed": 225,
    "appearance": "dark",
    "content_width": 80,
    "autosave_ticks": 600,
}

# --- Style Definition ---
inkline_style = Style.from_dict({
    # Live markdown
    'md.heading': 'bold cyan',
    'md.code': '#d0d0d0',
    'md.fg.secondary-label': '#8a8a8a',
    'md.fg.tertiary-label': '#5f5f5f',
    'md.fg.orange': '#d7875f',
    'md.fg.purple': '#af87ff',
    'md.fg.pink': '#ff5f87',
    'md.fg.blue': '#5fafff',
    'md.fg.gray': '#808080',
    'md.bg.gray': 'bg:#303030',
    'md.bg.blue': 'bg:#1c1c30',
    'md.code-block-dark': 'bg:#262626',
    'md.code-block-light': 'bg:#eeeef4 #1c1c1c',
    'md.rule': '#585858',

    # UI elements
    'status-warn': 'bg:#ff0000 #ffffff bold',
    'status-bar': 'bg:#222222 #00ff00',
    'status-goal': 'bg:#ffd700 #000000 bold',
    'status-dirty': '#ff0000',
    'prompt-normal': '#00ff00 bold',
    'spell-error': 'ansigray underline',
    'help-text': 'fg:#00ff00 bg:#000000',
    'body': 'fg:#00ff00 bg:#000000',
    'reverse-header': 'reverse bold',
})

# The dedicated Ghost Mode style
ghost_style = Style.from_dict({
    **dict(inkline_style.style_rules),
    # Black out scrollbars
    'scrollbar': 'fg:#000000 bg:#000000',
    'scrollbar.button': 'fg:#000000 bg:#000000',
    'scrollbar.background': 'fg:#000000 bg:#000000',
    'scrollbar.arrow': 'fg:#000000 bg:#000000',
    # Black out line numbers
    'line-number': 'fg:#000000 bg:#000000',
    'line-number.current': 'fg:#000000 bg:#000000',
})


def setup_logging(config_dir, level=logging.INFO):
    # The UI owns the terminal, so everything goes to a file.
    os.makedirs(config_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        os.path.join(config_dir, 'inkline.log'), maxBytes=1024 * 1024, backupCount=3, encoding='utf-8'
    )
    handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s %(message)s'))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def extract_title(markdown):
    """First level-one header of a markdown document, if any."""
    for line in markdown.splitlines():
        trimmed = line.strip()
        if trimmed.startswith('# '):
            return trimmed[2:].strip()
    return None


# --- Main Editor Class ---
class InklineEditor:
    def __init__(self, test_mode=False):
        self.test_mode = test_mode
        self._load_paths()
        self._load_config()

        # State
        self.post_status = "NEW"
        self.current_path = None
        self.last_saved_content = ""
        self.is_warning_mode = False
        self.pending_action = None
        self.show_help = False
        self.start_time = time.time()

        # Dictionary & Spell Checker
        self.show_spelling_errors = False
        self._reload_dictionary()
        if self.test_mode:
            os.makedirs(os.path.dirname(self.custom_dict_path), exist_ok=True)
            if not os.path.exists(self.custom_dict_path):
                with open(self.custom_dict_path, 'w', encoding='utf-8') as f:
                    f.write("")
        self.status_report = self._t("ready").format(lang=self.lang.upper())

        # Sprint & Ghost Mode
        self.sprint_active = False
        self.sprint_time_left = 0
        self.sprint_start_words = 0
        self.ghost_mode_enabled = False

        # Live markdown engine
        self.session = EditorSession(renderer=MarkdownRenderer(self.theme))
        self._loading = False

        # UI & Layout
        self._init_ui_components()
        self._init_layout()

        # Input Handling
        self.kb = KeyBindings()
        self.setup_bindings()

        # Final Setup
        self.apply_language(self.lang)
        if os.path.exists(self.recovery_path):
            self.status_report = self._t("recovery_found")

    def _load_paths(self):
        self.config_dir = CONFIG_DIR
        if not os.path.exists(self.config_dir):
            os.makedirs(self.config_dir)

        self.config_path = os.path.join(self.config_dir, 'config.json')
        self.recovery_path = os.path.join(self.config_dir, '.inkline_recovery.json')
        self.custom_dict_path = os.path.join(self.config_dir, 'custom_dictionary.txt')

    def _load_config(self):
        if not os.path.exists(self.config_path):
            with open(self.config_path, 'w') as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
        try:
            with open(self.config_path, 'r') as f:
                config = {**DEFAULT_CONFIG, **json.load(f)}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable config %s: %s", self.config_path, e)
            config = dict(DEFAULT_CONFIG)

        self.lang = config["language"] if config["language"] in TRANSLATIONS else "en"
        self.word_goal = int(config["word_goal"])
        self.reading_speed = int(config["reading_speed"])
        self.content_width = int(config["content_width"])
        self.autosave_ticks = int(config["autosave_ticks"])
        self.theme = Theme.for_appearance(config["appearance"])

    def _t(self, key):
        return TRANSLATIONS.get(self.lang, TRANSLATIONS['en'])["ui"][key]

    def _reload_dictionary(self):
        self.spell = SpellChecker(language=self.lang)
        if os.path.exists(self.custom_dict_path):
            self.spell.word_frequency.load_text_file(self.custom_dict_path)

    def _is_misspelled(self, word):
        return self.show_spelling_errors and word.lower() not in self.spell

    def _init_ui_components(self):
        # UI Fields
        self.header_label = Label(text=lambda: self._t("header"), style='class:reverse-header')

        self.title_field = TextArea(height=1, prompt=lambda: self._t("title"), multiline=False, focus_on_click=True)
        self.tags_field = TextArea(height=1, prompt=lambda: self._t("tags"), multiline=False, focus_on_click=True)

        self.body_lexer = LiveMarkdownLexer(self.session, misspelled=self._is_misspelled)
        self.body_field = TextArea(
            text="",
            scrollbar=True,
            line_numbers=True,
            lexer=self.body_lexer,
            input_processors=[HiddenMarkupProcessor(), BlockPaintProcessor(self.session)],
            wrap_lines=True,
            focus_on_click=True,
        )
        self.body_field.window.soft_wrap = True
        self.body_buffer = self.body_field.buffer
        self.body_buffer.on_text_changed += self._on_body_changed
        self.body_buffer.on_cursor_position_changed += self._on_body_cursor_moved

        self.command_field = TextArea(
            height=1,
            prompt=lambda: f"👻 {self._t('command')}" if self.ghost_mode_enabled else self._t("command"),
            style='class:prompt-normal',
            multiline=False,
            accept_handler=self.handle_normal_input,
            focus_on_click=True
        )
        self.warning_field = TextArea(height=1, prompt=lambda: self._t("warning_prompt"), style='class:status-warn', multiline=False, accept_handler=self.handle_warning_input, focus_on_click=True)

        # Static Text Areas
        self.help_field = TextArea(read_only=True, style='class:help-text')

    def _init_layout(self):
        # Rows
        self.header_bar = VSplit([
            Label(text=f" v{VERSION} ", style='class:reverse-header'),
            self.header_label,
            Label(text=lambda: f" [F1] {self._t('help_btn')} ", style='class:reverse-header')
        ], height=1)

        status_bar_view = VSplit([Window(), Label(text=self.get_status_text, style='class:status-bar'), Window()], height=1)
        command_view = VSplit([Window(), self.command_field, Window()], height=1)
        warning_view = VSplit([Window(), self.warning_field, Window()], height=1)

        # Visibility Logic
        self.header_row = DynamicContainer(lambda: self.header_bar if self.is_ui_visible() else Window(height=1))
        self.status_row = DynamicContainer(lambda: status_bar_view if self.is_ui_visible() else Window(height=1))

        metadata_row = DynamicContainer(lambda: HSplit([
            self.title_field,
            self.tags_field,
            Window(height=1, char='-')
        ], width=self.content_width) if self.is_ui_visible() else Window(height=3))

        # Main Stack
        main_stack = HSplit([
            ConditionalContainer(
                content=HSplit([
                    metadata_row,
                    self.body_field
                ], width=self.content_width),
                filter=Condition(lambda: not self.show_help)
            ),
            ConditionalContainer(content=self.help_field, filter=Condition(lambda: self.show_help)),
        ])

        self.container = HSplit([
            self.header_row,
            # Centered Editor
            VSplit([
                Window(),
                main_stack,
                Window(),
            ]),
            # Command Bar
            DynamicContainer(lambda: warning_view if self.is_warning_mode else command_view),
            # Status Bar
            ConditionalContainer(
                content=self.status_row,
                filter=Condition(lambda: self.is_ui_visible())
            ),
        ])

    def is_ui_visible(self):
        if not self.ghost_mode_enabled:
            return True
        try:
            return not get_app().layout.has_focus(self.body_field)
        except Exception:
            return True

    # --- Live markdown wiring ---
    def _selection_span(self, buffer):
        if buffer.selection_state:
            start, end = buffer.document.selection_range()
            return Span(start, end)
        return None

    def _on_body_changed(self, buffer):
        if not self._loading:
            self.session.begin_editing()
        self.session.on_text_changed(buffer.text, buffer.cursor_position)

    def _on_body_cursor_moved(self, buffer):
        self.session.on_selection_changed(buffer.cursor_position, self._selection_span(buffer))

    def _leave_body(self):
        if self.session.is_editing:
            self.session.end_editing()

    def _focus(self, target):
        if target is not self.body_field:
            self._leave_body()
        get_app().layout.focus(target)

    def load_document(self, text):
        """Replace the draft from outside the editor (file, recovery, new)."""
        self._leave_body()
        if text != self.session.get_text() and not self.session.set_text(text):
            self.status_report = self._t("busy")
            return False
        self._loading = True
        try:
            self.body_buffer.document = Document(text, self.session.cursor)
        finally:
            self._loading = False
        return True

    def copy_markdown(self):
        buff = self.body_buffer
        self.session.on_selection_changed(buff.cursor_position, self._selection_span(buff))
        text = self.session.on_copy()
        self.status_report = self._t("copied").format(count=len(text))
        return text

    def get_status_text(self):
        t = TRANSLATIONS.get(self.lang, TRANSLATIONS['en'])['status']
        dirty = " *" if self.is_dirty() else ""
        word_count = len(self.body_buffer.text.split())
        result = []

        if word_count >= self.word_goal:
            result.append(('class:status-goal', f" ★ {t['words']}: {word_count}/{self.word_goal} ★ "))
        else:
            result.append(('', f" {t['words']}: {word_count}/{self.word_goal} "))

        result.append(('', " | "))

        read_min = max(1, round(word_count / self.reading_speed))
        result.append(('', f" {read_min} {t.get('read', 'read')} "))

        if self.sprint_active:
            remaining = max(0, self.sprint_time_left)
            s_mins, s_secs = divmod(int(remaining), 60)
            sprint_color = 'class:status-warn' if remaining < 60 else ''

            result.append(('', " | 🚀 "))
            if remaining == 0:
                result.append(('class:status-goal', f" {t.get('done', 'DONE')}! "))
            else:
                result.append((sprint_color, f" {s_mins:02d}:{s_secs:02d} "))

        elapsed = int(time.time() - self.start_time)
        mins, secs = divmod(elapsed, 60)
        result.append(('', f" | {mins:02d}:{secs:02d} "))

        if dirty:
            result.append(('class:status-dirty', dirty))

        result.append(('', f" | {self.status_report} "))

        return result

    def is_dirty(self): return self.body_buffer.text.strip() != self.last_saved_content.strip()

    def apply_language(self, lang_code):
        self.lang = lang_code
        t = TRANSLATIONS[self.lang]["ui"]

        if self.post_status in ["[NEW]", "[NUEVO]", "NEW"]:
            self.post_status = t["new_post"]

        self.help_field.text = HELP_TEXT.get(self.lang, HELP_TEXT["en"]).strip()
        self._reload_dictionary()
        self.status_report = t["lang_feedback"]

    def spell_check(self):
        self.body_lexer.refresh()
        get_app().invalidate()

    def handle_normal_input(self, buffer):
        raw = buffer.text.strip()
        cmd = raw.lower()
        if not cmd:
            self._focus(self.body_field); return

        if cmd == ':new': self.start_new_post()
        elif cmd == ':spa': self.apply_language('es')
        elif cmd == ':eng': self.apply_language('en')
        elif cmd in [':q', ':exit']:
            if not self.is_dirty(): get_app().exit()
            else:
                self.is_warning_mode = True
                self.pending_action = "quit"
                self._focus(self.warning_field)
        elif cmd == ':help': self.show_help = True
        elif cmd == ':restore': self.load_recovery()
        elif cmd.startswith(':sprint'):
            parts = cmd.split()
            try:
                duration = int(parts[1]) if len(parts) > 1 else 25
                self.start_sprint(duration)
            except ValueError:
                self.start_sprint(25)
            self._focus(self.body_field)
        elif cmd.startswith(':speed'):
            parts = cmd.split()
            if len(parts) > 1 and parts[1].isdigit():
                self.reading_speed = int(parts[1])
                self.status_report = self._t("speed_set").format(speed=self.reading_speed)
        elif cmd.startswith(':add '):
            word_to_add = cmd.replace(':add ', '').strip().lower()
            if word_to_add:
                with open(self.custom_dict_path, 'a', encoding='utf-8') as f:
                    f.write(word_to_add + "\n")
                self.spell.word_frequency.load_words([word_to_add])
                self.status_report = f"'{word_to_add}' {self._t('added_to_dict')}"
                self.spell_check()
        elif cmd.startswith(':open '):
            # Paths keep their case
            self.import_markdown(raw[len(':open '):].strip())
        elif cmd == ':write' or cmd.startswith(':write '):
            path = raw[len(':write'):].strip() or self.current_path
            self.export_markdown(path)

        buffer.text = ""

    def handle_warning_input(self, buffer):
        if buffer.text.strip().lower() == 'y':
            if self.pending_action == "quit": get_app().exit()
            else: self._force_clear_all(); self.is_warning_mode = False
        else:
            self.is_warning_mode = False
            self._focus(self.body_field)
        buffer.text = ""

    def start_new_post(self):
        self.title_field.text = self.tags_field.text = ""
        self.load_document("")
        self.post_status = TRANSLATIONS[self.lang]["ui"]["new_post"]
        self.current_path = None
        self._focus(self.body_field)

    def _force_clear_all(self):
        self.start_new_post()
        self.last_saved_content = ""

    def run_spellcheck(self):
        text = self.body_buffer.text.strip()
        if not text:
            self.status_report = self._t("empty_doc")
            return
        words = re.findall(r'\w+', text.lower())
        misspelled = self.spell.unknown(words)

        if not misspelled:
            self.status_report = self._t("no_errors").format(lang=self.lang.upper())
        else:
            err_list = ', '.join(sorted(misspelled)[:3])
            self.status_report = self._t("errors_found").format(
                count=len(misspelled),
                list=err_list
            )

    # --- Markdown files ---
    def import_markdown(self, path):
        try:
            with open(os.path.expanduser(path), 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            logger.warning("Could not open %s: %s", path, e)
            self.status_report = self._t("open_error").format(error=str(e)[:20])
            return False

        if not self.load_document(text):
            return False
        self.title_field.text = extract_title(text) or os.path.splitext(os.path.basename(path))[0]
        self.current_path = path
        self.last_saved_content = text
        self.status_report = self._t("opened").format(path=os.path.basename(path))
        return True

    def export_markdown(self, path):
        if not path:
            self.status_report = self._t("no_path")
            return False
        try:
            with open(os.path.expanduser(path), 'w', encoding='utf-8') as f:
                f.write(self.session.get_text())
        except OSError as e:
            logger.warning("Could not write %s: %s", path, e)
            self.status_report = self._t("save_error").format(error=str(e)[:20])
            return False

        self.current_path = path
        self.last_saved_content = self.session.get_text()
        self.status_report = self._t("saved").format(path=os.path.basename(path))
        return True

    def _wrap_selection(self, symbol, offset_len):
        buff = self.body_field.buffer
        if buff.selection_state:
            start, end = buff.document.selection_range()
            text = buff.document.text[start:end].strip()
            new_text = buff.document.text[:start] + f"{symbol}{text}{symbol}" + buff.document.text[end:]
            buff.text = new_text
            buff.cursor_position = start + len(text) + (len(symbol) * 2)
            buff.exit_selection()
        else:
            buff.insert_text(symbol * 2)
            buff.cursor_left(count=offset_len)

    def setup_bindings(self):
        kb = self.kb

        @kb.add('f1')
        def _(event): self.show_help = not self.show_help

        @kb.add('tab')
        def _(event): self._leave_body(); event.app.layout.focus_next()

        @kb.add('s-tab')
        def _(event): self._leave_body(); event.app.layout.focus_previous()

        @kb.add('c-d')
        def _(event):
            self.show_spelling_errors = not self.show_spelling_errors
            if self.show_spelling_errors:
                self.run_spellcheck()
            else:
                self.status_report = self._t("ready").format(lang=self.lang.upper())
            self.body_lexer.refresh()
            event.app.invalidate()

        @kb.add('c-g')
        def _(event): self._focus(self.command_field)

        @kb.add('c-s')
        def _(event): self.export_markdown(self.current_path)

        @kb.add('c-c')
        def _(event):
            if event.app.layout.has_focus(self.body_field):
                event.app.clipboard.set_text(self.copy_markdown())

        @kb.add('c-t')
        def _(event):
            self.ghost_mode_enabled = not self.ghost_mode_enabled

            # 1. Toggle the widget attributes
            self.body_field.scrollbar = not self.ghost_mode_enabled
            self.body_field.line_numbers = not self.ghost_mode_enabled

            # 2. Swap the global application style
            event.app.style = ghost_style if self.ghost_mode_enabled else inkline_style

            # Refocusing makes the TextArea recompute its gutter width.
            event.app.layout.focus(self.command_field)
            event.app.layout.focus(self.body_field)
            event.app.invalidate()

        # Markdown Formatting Hotkeys
        @kb.add('c-b')
        def _(event): self._wrap_selection("**", 2)

        @kb.add('c-k')
        def _(event): self._wrap_selection("*", 1)

        @kb.add('c-q')
        def _(event):
            buff = self.body_field.buffer
            if buff.selection_state:
                text = buff.copy_selection().text
                buff.insert_text(f"> {text}", overwrite=True)
            else:
                buff.insert_text("> ")

        @kb.add('c-l')
        def _(event):
            buff = self.body_field.buffer
            if buff.selection_state:
                start, end = buff.document.selection_range()
                lines = buff.document.text[start:end].splitlines()
                new_list = "\n".join([f"* {line.strip()}" for line in lines if line.strip()])
                buff.text = buff.document.text[:start] + new_list + buff.document.text[end:]
                buff.cursor_position = start + len(new_list)
                buff.exit_selection()
            else:
                buff.insert_text("* ")

    def start_sprint(self, mins):
        self.sprint_time_left = int(mins) * 60
        self.sprint_active = True
        self.sprint_start_words = len(self.body_buffer.text.split())
        self.status_report = self._t("sprint_start").format(mins=mins)

    def update_sprint(self):
        if self.sprint_active and self.sprint_time_left > 0:
            self.sprint_time_left -= 1
            if self.sprint_time_left <= 0:
                self.sprint_active = False
                gain = max(0, len(self.body_buffer.text.split()) - self.sprint_start_words)
                self.status_report = self._t("sprint_done").format(gain=gain)

    def auto_save_recovery(self):
        try:
            with open(self.recovery_path, 'w') as f:
                json.dump({"title": self.title_field.text, "body": self.body_buffer.text}, f)
        except OSError as e:
            logger.warning("Recovery autosave failed: %s", e)

    def load_recovery(self):
        try:
            with open(self.recovery_path, 'r') as f:
                d = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Recovery file unusable: %s", e)
            return
        self.title_field.text = d.get('title', '')
        self.load_document(d.get('body', ''))


def show_loading():
    print("\033[H\033[J" + get_banner())
    time.sleep(1.3)


def start_editor(path=None, test_mode=False):
    # Logging comes first so config problems land in the log file.
    setup_logging(CONFIG_DIR)
    editor = InklineEditor(test_mode=test_mode)
    if path:
        editor.import_markdown(path)
    return editor


async def main(path=None):
    editor = start_editor(path)
    app = Application(
        layout=Layout(editor.container, focused_element=editor.body_field.buffer),
        key_bindings=editor.kb,
        full_screen=True,
        style=inkline_style,
        editing_mode=EditingMode.EMACS,
        mouse_support=True
    )
    async def refresh():
        ticks = 0
        while True:
            await asyncio.sleep(0.1)
            app.invalidate()
            ticks += 1
            if ticks % 10 == 0: editor.update_sprint()
            if ticks >= editor.autosave_ticks: editor.auto_save_recovery(); ticks = 0

    app.create_background_task(refresh())
    await app.run_async()

def run():
    show_loading()
    try: asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
    except (KeyboardInterrupt, EOFError): pass

if __name__ == "__main__":
    run()
