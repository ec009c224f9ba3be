# rat23s/lex/source.py
"""Character source for the lexer.

Reads the input one byte at a time and supports exactly one character of
pushback, which is all the lexer's maximal-munch lookahead ever needs.
"""

from __future__ import annotations
import io
from pathlib    import Path
from typing     import BinaryIO, Optional

UTF8_BOM = b"\xef\xbb\xbf"


class CharSource:
    """
    CharSource
    ==========
    Sequential single-byte reader with a one-character pushback slot.

    - `read()` returns the next byte as a 1-char string (latin-1 mapping),
      or None at end of stream.
    - `unget(ch)` puts one character back; a second unget without an
      intervening read raises RuntimeError.
    - `skip_bom()` drops a leading UTF-8 byte-order mark, if any.
    """

    def __init__(self, stream: BinaryIO, name: str = "<input>"):
        self._stream = stream
        self._pending: Optional[str] = None
        self._head = b""     # bytes read by skip_bom() that were not a BOM
        self._started = False
        self._closed = False
        self.name = name

    # ---- Constructors ----
    @classmethod
    def from_path(cls, path: str) -> "CharSource":
        """Open `path` in binary mode. OSError propagates to the caller."""
        return cls(open(Path(path), "rb"), name=str(path))

    @classmethod
    def from_text(cls, text: str, name: str = "<text>") -> "CharSource":
        return cls(io.BytesIO(text.encode("utf-8")), name=name)

    # ---- Reading ----
    def read(self) -> Optional[str]:
        self._started = True
        if self._pending is not None:
            ch = self._pending
            self._pending = None
            return ch
        if self._head:
            b, self._head = self._head[0], self._head[1:]
            return chr(b)
        b = self._stream.read(1)
        if not b:
            return None
        return chr(b[0])

    def unget(self, ch: str) -> None:
        if self._pending is not None:
            raise RuntimeError("CharSource supports only one character of pushback")
        self._pending = ch

    def skip_bom(self) -> bool:
        """Consume a UTF-8 BOM at the very start. Returns True if one was skipped.

        Bytes that turn out not to be a BOM are kept and served by `read()`,
        so the stream does not need to be seekable.
        """
        if self._started:
            raise RuntimeError("skip_bom() must be called once, before the first read")
        self._started = True
        head = self._stream.read(len(UTF8_BOM))
        if head == UTF8_BOM:
            return True
        self._head = head
        return False

    # ---- Lifecycle ----
    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream.close()
