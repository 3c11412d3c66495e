from __future__ import annotations

from typing import BinaryIO, Callable, Iterable, Iterator

import structlog

from schemas.ncom import DecodedUpdate
from tools.decoders import Decoder, FeedResult
from tools.translators.ncom_to_text import format_update

from .demux import Sinks, route
from .metrics import ProgressReporter, ProgressSnapshot

log = structlog.get_logger("ncom2text.pipeline")

LineFormatter = Callable[[DecodedUpdate], str]


def iter_bytes(handle: BinaryIO, chunk_size: int = 65536) -> Iterator[int]:
    """Yield the stream one byte at a time, reading it in ``chunk_size`` blocks."""
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            return
        yield from chunk


def run(
    source: Iterable[int],
    session: Decoder,
    sinks: Sinks,
    *,
    reporter: ProgressReporter,
    format_line: LineFormatter = format_update,
) -> ProgressSnapshot:
    """Feed every byte of ``source`` to ``session`` and route completed updates.

    Progress is reported whenever the consumed-byte count hits a multiple of
    the reporter's interval, and exactly once more after the stream ends.
    """
    for byte in source:
        if session.feed(byte) is FeedResult.UPDATE:
            update = session.update
            if update is not None:
                route(update, format_line(update), sinks)

        if reporter.due(session.bytes_consumed):
            reporter.report(ProgressSnapshot.of(session))

    session.finish()
    final = ProgressSnapshot.of(session)
    reporter.finish(final)
    log.info(
        "conversion finished",
        primary_lines=sinks.written["primary"],
        trigger_lines=sinks.written["trigger"],
        **final.to_dict(),
    )
    return final


__all__ = ["LineFormatter", "iter_bytes", "run"]
