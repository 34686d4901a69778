# =========================
# indexblocks/parser_utils.py
# Tokenizer and integer helpers shared by the readers
# =========================

from __future__ import annotations
import pathlib
import re
from typing import List, Optional, Tuple

from .exceptions import IndexFormatError


# --------------------
# Basic helpers
# --------------------


def strip_comments(text: str) -> str:
    """Remove trailing '#' comments per line (keeps indentation/whitespace before '#')."""
    out = []
    for line in text.splitlines():
        i = line.find("#")
        if i >= 0:
            line = line[:i]
        out.append(line.rstrip())
    return "\n".join(out)


_INT_RE = re.compile(r"[+-]?\d+")


def _is_signed_int(s: str) -> bool:
    return bool(_INT_RE.fullmatch(s))


def parse_int(s: str, line_no: int, what: str) -> int:
    """Parse a signed integer literal or raise IndexFormatError naming `what`."""
    t = s.strip()
    if not _is_signed_int(t):
        raise IndexFormatError(line_no, f"expected integer for {what} but got '{s}'")
    return int(t)


# --------------------
# Tokenization
# --------------------


class TokenStream:
    """Whitespace-delimited tokens with '#' comments removed.

    Every token remembers the line it came from so errors can point at it.
    """

    def __init__(self, text: str, source: str = "<string>"):
        self.source = source
        self._tokens: List[Tuple[str, int]] = []
        for line_no, line in enumerate(strip_comments(text).splitlines(), start=1):
            for tok in line.split():
                self._tokens.append((tok, line_no))
        self._pos = 0

    @classmethod
    def from_path(cls, path) -> "TokenStream":
        p = pathlib.Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise IndexFormatError(
                0, f"not a UTF-8 text file (byte {e.start}: {e.reason})", source=str(p)
            )
        return cls(text, source=str(p))

    @property
    def line_no(self) -> int:
        """Line of the most recently consumed token (or the next one at start)."""
        if not self._tokens:
            return 0
        idx = max(self._pos - 1, 0)
        idx = min(idx, len(self._tokens) - 1)
        return self._tokens[idx][1]

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def peek(self) -> Optional[str]:
        if self.at_end():
            return None
        return self._tokens[self._pos][0]

    def next_token(self, what: str = "token") -> str:
        if self.at_end():
            raise IndexFormatError(
                self.line_no,
                f"unexpected end of input while reading {what}",
                source=self.source,
            )
        tok = self._tokens[self._pos][0]
        self._pos += 1
        return tok

    def next_int(self, what: str = "integer") -> int:
        tok = self.next_token(what)
        return parse_int(tok, self.line_no, what)
