"""Capture a payload from the user's text editor."""

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPT_HEADER = "# Enter strings payload (YAML or JSON). Save and close to submit.\n"


def _editor_command() -> list[str]:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"
    return shlex.split(editor)


def capture_interactive_strings_input() -> str:
    """Open the editor on a scratch file and return what the user saved.

    The helper comment line is stripped. Returns an empty string when the
    user saved nothing.

    Raises:
        RuntimeError: If the editor exits with a non-zero status.
    """
    fd, name = tempfile.mkstemp(prefix="xcstrings-", suffix=".yaml")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(PROMPT_HEADER)

        command = [*_editor_command(), str(path)]
        logger.debug("Launching editor: %s", command)
        result = subprocess.run(command, check=False)
        if result.returncode != 0:
            raise RuntimeError(f"Editor exited with status {result.returncode}.")

        content = path.read_text(encoding="utf-8")
    finally:
        path.unlink(missing_ok=True)

    if content.startswith(PROMPT_HEADER):
        content = content[len(PROMPT_HEADER):]
    return content
