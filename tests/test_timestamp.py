from datetime import datetime, timezone

from tmkms.timestamp import TimeMsg

VOTE_TIME_BYTES = bytes([8, 177, 211, 129, 210, 5, 16, 128, 157, 202, 111])
ZERO_TIME_BYTES = bytes([0x8, 0x80, 0x92, 0xB8, 0xC3, 0x98, 0xFE, 0xFF, 0xFF, 0xFF, 0x1])


def _vote_time():
    return TimeMsg.from_datetime(datetime(2017, 12, 25, 3, 0, 1, 234000, tzinfo=timezone.utc))


def test_encode_known_vector():
    assert _vote_time().encode() == VOTE_TIME_BYTES


def test_decode_known_vector():
    assert TimeMsg.decode(VOTE_TIME_BYTES) == _vote_time()


def test_year_one():
    t = TimeMsg(-62_135_596_800, 0)
    assert t.encode() == ZERO_TIME_BYTES
    assert TimeMsg.decode(ZERO_TIME_BYTES) == t
    assert t.to_datetime() == datetime(1, 1, 1, tzinfo=timezone.utc)


def test_datetime_round_trip():
    dt = datetime(2018, 2, 11, 7, 9, 22, 765000, tzinfo=timezone.utc)
    assert TimeMsg.from_datetime(dt).to_datetime() == dt