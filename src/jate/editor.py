"""Editor controller: wires terminal, document, modes, and rendering."""

from __future__ import annotations

from contextlib import ExitStack
from typing import Callable, Optional

from jate.actions.file import QUIT
from jate.actions.prompt import PROMPT_CANCEL, PROMPT_SUBMIT
from jate.buffer import DiskFileStore, Document, EditorState, FileStore, FileStoreError
from jate.config import EditorConfig
from jate.errors import FatalEditorError
from jate.modes.base_mode import ModeBus, ModeContext, ModeResult
from jate.modes.editing_mode import EditingMode
from jate.modes.mode_manager import ModeManager
from jate.modes.prompt_mode import PromptMode
from jate.render import RenderEngine
from jate.runtime import telemetry
from jate.terminal import escapes
from jate.terminal.decoder import KeyDecoder
from jate.terminal.io import Terminal, raw_mode

HELP_MESSAGE = "HELP: Ctrl-S = Save | Ctrl-Q = Quit"

_LOGGED_EVENTS = (
    "file.write",
    "file.write_failed",
    "prompt.submit",
    "prompt.cancel",
    "editor.quit",
)


def create_default_manager(context: ModeContext) -> ModeManager:
    """Build a ModeManager with both modes and the default keymaps."""

    manager = ModeManager(context)
    manager.register_mode(EditingMode)
    manager.register_mode(PromptMode)
    return manager


class Editor:
    """One interactive session on one document."""

    def __init__(
        self,
        terminal: Terminal,
        *,
        document: Optional[Document] = None,
        store: Optional[FileStore] = None,
        config: Optional[EditorConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.terminal = terminal
        self.config = config or EditorConfig()
        self.store = store or DiskFileStore()
        self.decoder = KeyDecoder(terminal, lookahead=self.config.escape_lookahead)
        self.renderer = RenderEngine(terminal)
        rows, cols = terminal.query_window_size()
        self.state = EditorState.for_window(
            document or Document(tab_stop=self.config.tab_stop),
            rows,
            cols,
            config=self.config,
            clock=clock,
        )
        self.bus = ModeBus()
        self.context = ModeContext(
            state=self.state,
            store=self.store,
            bus=self.bus,
            extras={"line_prompt": self.prompt},
        )
        self.manager = create_default_manager(self.context)
        for event in _LOGGED_EVENTS:
            self.bus.subscribe(
                event, lambda payload, name=event: self._log_event(name, payload)
            )

    @classmethod
    def open(
        cls,
        terminal: Terminal,
        filename: Optional[str] = None,
        *,
        store: Optional[FileStore] = None,
        config: Optional[EditorConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "Editor":
        """Create an editor, loading ``filename`` when given.

        A file that cannot be opened is fatal, unlike a failed save.
        """

        config = config or EditorConfig()
        store = store or DiskFileStore()
        document = None
        if filename is not None:
            try:
                document = Document.load(store, filename, tab_stop=config.tab_stop)
            except FileStoreError as exc:
                raise FatalEditorError("open", exc.cause) from exc
        return cls(
            terminal, document=document, store=store, config=config, clock=clock
        )

    @property
    def document(self) -> Document:
        return self.state.document

    def refresh_screen(self) -> None:
        self.renderer.refresh(self.state)

    def process_keypress(self) -> ModeResult:
        return self.manager.handle_key(self.decoder.read_key())

    def run(self) -> int:
        """Main loop; returns the process exit status."""

        self.state.set_status_message(HELP_MESSAGE)
        with telemetry.span(
            "editor::session",
            component="editor",
            metadata={"file": self.document.filename or ""},
        ):
            while True:
                self.refresh_screen()
                result = self.process_keypress()
                if result.status == QUIT:
                    break
        self.terminal.write(escapes.reset_screen())
        return 0

    def prompt(self, template: str) -> Optional[str]:
        """Ask for a line of text in the message bar; ``None`` if cancelled."""

        mode = self.manager.get_mode(PromptMode.name)
        assert isinstance(mode, PromptMode)
        self.manager.switch_mode(PromptMode.name)
        try:
            mode.begin(template)
            while True:
                self.refresh_screen()
                result = self.process_keypress()
                if result.status == PROMPT_SUBMIT:
                    return result.message
                if result.status == PROMPT_CANCEL:
                    return None
        finally:
            self.manager.switch_mode(EditingMode.name)

    def _log_event(self, name: str, payload: object | None) -> None:
        data = dict(payload) if isinstance(payload, dict) else {"payload": payload}
        level = "warning" if name.endswith("failed") else "info"
        telemetry.record_event(name, level=level, data=data)


def run_editor(
    terminal: Terminal,
    filename: Optional[str] = None,
    *,
    store: Optional[FileStore] = None,
    config: Optional[EditorConfig] = None,
) -> int:
    """Run a full session with the terminal held in raw mode throughout."""

    with ExitStack() as stack:
        stack.enter_context(raw_mode(terminal))
        editor = Editor.open(terminal, filename, store=store, config=config)
        return editor.run()


__all__ = ["Editor", "HELP_MESSAGE", "create_default_manager", "run_editor"]
