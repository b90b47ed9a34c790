"""HandlerConfig: immutable settings for decoding and re-serialising payloads.

HandlerConfig is a frozen (immutable) dataclass, so one instance can be shared
by any number of content handlers.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass

__all__ = ["HandlerConfig"]


@dataclass(frozen=True, slots=True)
class HandlerConfig:
    """Immutable configuration for ``JsonContentHandler``.

    Attributes:
        encoding: Text encoding of the raw payload bytes.  Default "utf-8".
        indent: Number of spaces used when pretty-printing undocumented
            content (>= 0).  Default 2.
        ensure_ascii: When True, non-ASCII characters in undocumented content
            are escaped.  Default False.
    """

    encoding: str = "utf-8"
    indent: int = 2
    ensure_ascii: bool = False

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            msg = f"encoding must be a known codec, got {self.encoding!r}"
            raise ValueError(msg) from None
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)
