"""Command line entry point: ``jate [FILE]``."""

from __future__ import annotations

import argparse
import contextlib
import os
import sys
from typing import Optional, Sequence

from jate.config import EditorConfig
from jate.editor import run_editor
from jate.errors import FatalEditorError
from jate.runtime import telemetry
from jate.terminal import escapes
from jate.terminal.io import PosixTerminal, TerminalError


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jate", description="A small terminal text editor."
    )
    parser.add_argument("filename", nargs="?", help="File to open")
    parser.add_argument(
        "--log-file",
        default=os.environ.get("JATE_LOG_FILE"),
        help="Write editor logs to this file (default: $JATE_LOG_FILE)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("JATE_LOG_LEVEL"),
        help="Minimum log level (default: $JATE_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(log_file=args.log_file, level=args.log_level)
    config = EditorConfig.from_env()
    terminal = PosixTerminal()
    try:
        return run_editor(terminal, args.filename, config=config)
    except FatalEditorError as exc:
        with contextlib.suppress(TerminalError):
            terminal.write(escapes.reset_screen())
        telemetry.record_event(
            "editor.fatal",
            level="error",
            data={"operation": exc.operation, "reason": str(exc)},
        )
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - interactive entry point
    sys.exit(main())
