"""
User Prompt Capability

Confirmation, clipboard and notices are host capabilities. Controllers
depend on the UserPrompt protocol only; ConsolePrompt is the terminal
implementation used by the command line client.
"""

import logging
import shutil
import subprocess
import sys
from typing import Callable, Optional, Protocol, TextIO

logger = logging.getLogger(__name__)

# Tried in order; first one found on PATH wins
CLIPBOARD_COMMANDS = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class UserPrompt(Protocol):
    """Host-provided user interaction."""

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        ...

    def copy_to_clipboard(self, text: str) -> bool:
        """Copy text, returning False on failure."""
        ...

    def notify(self, message: str) -> None:
        """Show a message that needs acknowledgment."""
        ...


class ConsolePrompt:
    """UserPrompt for a terminal session."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
        assume_yes: bool = False,
    ):
        self.input_func = input_func
        self.output = output or sys.stdout
        self.assume_yes = assume_yes

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        try:
            answer = self.input_func(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")

    def copy_to_clipboard(self, text: str) -> bool:
        for command in CLIPBOARD_COMMANDS:
            if shutil.which(command[0]) is None:
                continue
            try:
                subprocess.run(command, input=text.encode(), check=True, timeout=5)
                return True
            except (OSError, subprocess.SubprocessError) as e:
                logger.debug(f"Clipboard command {command[0]} failed: {e}")
        return False

    def notify(self, message: str) -> None:
        print(message, file=self.output)
