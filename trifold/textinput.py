from __future__ import annotations
import sys
from collections import deque
from typing import List, Optional, TextIO

SUBMIT_CHARS = ("\r", "\n")
ERASE_CHARS = ("\x7f", "\b")


def echo(text: str, stream: Optional[TextIO] = None) -> None:
    """Teletype-style live echo: rewrite the current terminal line."""
    out = stream if stream is not None else sys.stdout
    out.write(f"\r{text}\x1b[J")
    out.flush()


class LineBuffer:
    """
    Assembles raw characters into command lines.

    Characters are queued by push() as they arrive and only interpreted by
    drain(), which the game loop calls once per tick.
    """

    def __init__(self, stream: Optional[TextIO] = None, echo_enabled: bool = True):
        self.text = ""
        self.stream = stream
        self.echo_enabled = echo_enabled
        self._pending: deque[str] = deque()

    def push(self, chars: str) -> None:
        self._pending.extend(chars)

    def drain(self) -> List[str]:
        """Consume queued characters; returns the lines completed by them."""
        lines: List[str] = []
        updated = False
        while self._pending:
            ch = self._pending.popleft()
            if ch in SUBMIT_CHARS:
                lines.append(self.text)
                self.text = ""
            elif ch in ERASE_CHARS:
                self.text = self.text[:-1]
            else:
                self.text += ch
            updated = True

        if updated and self.echo_enabled:
            echo(self.text, self.stream)
        return lines
