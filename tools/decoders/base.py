from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from schemas.ncom import DecodedUpdate


class FeedResult(Enum):
    NONE = 0
    UPDATE = 1


class DecoderCreationError(RuntimeError):
    """Raised when a decoder session cannot be created."""


@runtime_checkable
class Decoder(Protocol):
    """Byte-fed decoder session.

    ``update`` holds the most recent completed update and is only guaranteed
    until the next call to ``feed``.
    """

    @property
    def update(self) -> Optional[DecodedUpdate]: ...

    @property
    def bytes_consumed(self) -> int: ...

    @property
    def packets_decoded(self) -> int: ...

    @property
    def bytes_skipped(self) -> int: ...

    def feed(self, byte: int) -> FeedResult: ...

    def finish(self) -> None:
        """Account for bytes still buffered when the stream ends."""

    def close(self) -> None: ...


__all__ = ["Decoder", "DecoderCreationError", "FeedResult"]
