"""Timestamp messages."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .amino import VARINT, ProtoReader, ProtoWriter, _to_int32, _to_int64

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class TimeMsg:
    seconds: int = 0
    nanos: int = 0

    @classmethod
    def from_datetime(cls, value: datetime) -> "TimeMsg":
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        utc = value.astimezone(timezone.utc)
        return cls(calendar.timegm(utc.timetuple()), utc.microsecond * 1000)

    def to_datetime(self) -> datetime:
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)

    def encode(self) -> bytes:
        w = ProtoWriter()
        w.int64(1, self.seconds)
        w.int64(2, self.nanos)
        return w.getvalue()

    @classmethod
    def decode(cls, data: bytes) -> "TimeMsg":
        msg = cls()
        for tag, wire, value in ProtoReader(data).fields():
            if tag == 1 and wire == VARINT:
                msg.seconds = _to_int64(value)
            elif tag == 2 and wire == VARINT:
                msg.nanos = _to_int32(value)
        return msg