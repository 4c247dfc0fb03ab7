"""Editor selection and launch.

The editor is chosen from a fixed allow-list and run in the foreground with
the terminal's standard streams, so the user interacts with it directly.
"""

from __future__ import annotations

import logging
import subprocess
from enum import StrEnum
from pathlib import Path
from typing import Callable

from s3edit.core.exceptions import EditorError

logger = logging.getLogger(__name__)


class Editor(StrEnum):
    """Terminal editors s3edit is allowed to launch."""

    VI = "vi"
    VIM = "vim"
    NANO = "nano"


EDITOR_NAMES: tuple[str, ...] = tuple(e.value for e in Editor)

PROMPT = f"Enter the text editor to use ({', '.join(EDITOR_NAMES)}): "


def prompt_editor(read_line: Callable[[str], str] | None = None) -> Editor:
    """Ask for an editor until the answer is on the allow-list.

    Raises:
        EditorError: stdin closed before a valid editor was entered.
    """
    if read_line is None:
        read_line = input
    while True:
        try:
            answer = read_line(PROMPT).strip()
        except EOFError as exc:
            raise EditorError("", "No editor selected: end of input") from exc

        if answer in EDITOR_NAMES:
            return Editor(answer)

        print(f"Invalid input. Please enter one of [{', '.join(EDITOR_NAMES)}].")


def launch_editor(editor: Editor, target: Path) -> None:
    """Run ``editor target`` in the foreground and wait for it to exit.

    Standard streams are inherited from this process.

    Raises:
        EditorError: the editor could not be started or exited non-zero.
    """
    logger.info("Launching %s on %s", editor, target)
    try:
        subprocess.run([str(editor), str(target)], check=True)
    except FileNotFoundError as exc:
        raise EditorError(str(editor), f"Editor {editor!s} not found on PATH") from exc
    except subprocess.CalledProcessError as exc:
        raise EditorError(
            str(editor),
            f"Editor {editor!s} exited with status {exc.returncode}",
            returncode=exc.returncode,
        ) from exc
    except OSError as exc:
        raise EditorError(str(editor), f"Failed to launch editor {editor!s}: {exc}") from exc
