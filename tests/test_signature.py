import pytest

from tmkms.amino import DecodeError
from tmkms.signature import SignedMsgType


@pytest.mark.parametrize("member", list(SignedMsgType))
def test_round_trip(member):
    assert SignedMsgType.from_u32(int(member)) is member


def test_proposal_value():
    assert SignedMsgType.from_u32(0x20) is SignedMsgType.PROPOSAL


def test_invalid():
    with pytest.raises(DecodeError, match="Invalid vote type"):
        SignedMsgType.from_u32(3)