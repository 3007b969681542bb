"""Save and quit actions."""

from __future__ import annotations

from typing import MutableMapping, cast

from jate.buffer import FileStoreError
from jate.keymaps import ResolutionMatch
from jate.modes.base_mode import ModeContext, ModeResult
from jate.modes.keymap_helpers import require_line_prompt
from jate.runtime import telemetry

SAVE_AS_TEMPLATE = "Save as: {}"
QUIT_PENDING = "quit_pending"
QUIT = "quit"


def save_document(
    context: ModeContext, match: ResolutionMatch | None = None
) -> ModeResult:
    """Write the document, asking for a filename first when none is bound.

    Failures never escape: they become a status message and leave the
    document (dirty counter included) as it was.
    """

    del match
    state = context.state
    document = context.document

    if document.filename is None:
        filename = require_line_prompt(context)(SAVE_AS_TEMPLATE)
        if filename is None:
            state.set_status_message("Save aborted")
            return ModeResult(consumed=True, status="save_aborted")
        document.filename = filename

    filename = document.filename
    data = document.serialize()
    with telemetry.span(
        "file::save", component="file", metadata={"file": filename}
    ) as handle:
        try:
            written = context.store.write(filename, data)
        except FileStoreError as exc:
            handle.add_metadata("error", exc.reason)
            state.set_status_message(f"Can't save! I/O error: {exc.reason}")
            context.bus.emit(
                "file.write_failed", {"filename": filename, "reason": exc.reason}
            )
            return ModeResult(consumed=True, status="save_failed", message=exc.reason)
        handle.add_metadata("bytes", written)

    document.mark_saved()
    state.set_status_message(f"{written} bytes written to disk")
    context.bus.emit("file.write", {"filename": filename, "bytes": written})
    return ModeResult(consumed=True, status="saved")


def _quit_state(context: ModeContext) -> MutableMapping[str, int]:
    state = cast(
        MutableMapping[str, int], context.extras.setdefault("quit_state", {})
    )
    state.setdefault("remaining", context.state.config.quit_times)
    return state


def reset_quit_counter(context: ModeContext) -> None:
    _quit_state(context)["remaining"] = context.state.config.quit_times


def quit_remaining(context: ModeContext) -> int:
    return _quit_state(context)["remaining"]


def request_quit(
    context: ModeContext, match: ResolutionMatch | None = None
) -> ModeResult:
    """Quit, insisting on repeated presses while there are unsaved changes."""

    del match
    state = context.state
    if context.document.modified:
        quit_state = _quit_state(context)
        quit_state["remaining"] -= 1
        remaining = quit_state["remaining"]
        if remaining > 0:
            state.set_status_message(
                "WARNING!!! File has unsaved changes. "
                f"Press Ctrl-Q {remaining} more times to quit."
            )
            return ModeResult(
                consumed=True, status=QUIT_PENDING, message=str(remaining)
            )

    context.bus.emit("editor.quit", {"dirty": context.document.dirty})
    return ModeResult(consumed=True, status=QUIT)


__all__ = [
    "SAVE_AS_TEMPLATE",
    "QUIT",
    "QUIT_PENDING",
    "save_document",
    "request_quit",
    "reset_quit_counter",
    "quit_remaining",
]
