"""Registry of byte-stream decoders available to the converter."""

from __future__ import annotations

from typing import Callable, List, Tuple

from .base import Decoder, DecoderCreationError, FeedResult
from .simulated import SimulatedDecoder

DECODERS: List[Tuple[str, Callable[[], Decoder]]] = [
    ("simulated_v1", SimulatedDecoder),
]


def available_decoders() -> List[str]:
    return [name for name, _ in DECODERS]


def create_decoder(name: str) -> Decoder:
    key = name.strip().lower()
    for registered, factory in DECODERS:
        if registered == key:
            try:
                return factory()
            except Exception as exc:
                raise DecoderCreationError(f"Unable to create decoder {name!r}: {exc}") from exc
    raise DecoderCreationError(
        f"Unknown decoder {name!r}; available: {', '.join(available_decoders())}"
    )


__all__ = [
    "DECODERS",
    "Decoder",
    "DecoderCreationError",
    "FeedResult",
    "available_decoders",
    "create_decoder",
]
