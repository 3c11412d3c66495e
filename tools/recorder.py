"""Append-only text sinks for converted records."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import structlog

log = structlog.get_logger("ncom2text.recorder")


class TextSink:
    def __init__(self, handle: TextIO, *, name: str = "sink") -> None:
        self.name = name
        self._fh: TextIO | None = handle
        self.lines_written = 0

    @classmethod
    def open(cls, path: str | Path, *, name: str | None = None) -> "TextSink":
        target = Path(path)
        handle = target.open("w", encoding="utf-8", newline="\n")
        return cls(handle, name=name or target.name)

    @property
    def closed(self) -> bool:
        return self._fh is None

    def write(self, line: str) -> None:
        if self._fh is None:
            raise ValueError(f"write to closed sink {self.name!r}")
        self._fh.write(line)
        if not line.endswith("\n"):
            self._fh.write("\n")
        self.lines_written += 1

    def close(self) -> None:
        if self._fh is None:
            return
        try:
            self._fh.flush()
            self._fh.close()
        finally:
            self._fh = None
        log.debug("sink closed", sink=self.name, lines=self.lines_written)

    def __enter__(self) -> "TextSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["TextSink"]
