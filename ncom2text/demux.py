from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from schemas.ncom import DecodedUpdate, PacketClass


class LineSink(Protocol):
    def write(self, line: str) -> object: ...


class Channel(str, Enum):
    PRIMARY = "primary"
    TRIGGER = "trigger"


@dataclass
class Sinks:
    primary: LineSink
    trigger: Optional[LineSink] = None
    written: Counter = field(default_factory=Counter)

    def for_channel(self, channel: Channel) -> Optional[LineSink]:
        if channel is Channel.PRIMARY:
            return self.primary
        return self.trigger


_CHANNELS = {
    PacketClass.REGULAR: Channel.PRIMARY,
    PacketClass.TRIGGER_FALLING_EDGE: Channel.TRIGGER,
}


def select_channel(update: DecodedUpdate, sinks: Sinks) -> Optional[Channel]:
    channel = _CHANNELS.get(update.packet_class)
    if channel is None or sinks.for_channel(channel) is None:
        return None
    return channel


def route(update: DecodedUpdate, line: str, sinks: Sinks) -> Optional[Channel]:
    """Write ``line`` to the sink matching the update's packet class.

    Returns the channel written to, or ``None`` when the update is dropped
    (unrouted class, or a trigger update with no trigger sink configured).
    """
    channel = select_channel(update, sinks)
    if channel is None:
        return None
    sink = sinks.for_channel(channel)
    sink.write(line)
    sinks.written[channel.value] += 1
    return channel


__all__ = ["Channel", "LineSink", "Sinks", "route", "select_channel"]
