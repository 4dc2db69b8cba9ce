# tmkms

Building blocks for a Tendermint key management service: the messages a
validator exchanges with a remote signer, the canonical bytes to sign, and a
state file that guards against double signing. The package has no
dependencies outside the standard library.

## What is in the package

- `tmkms.amino`: the wire-format helpers. `compute_prefix(name)` gives the
  4-byte Amino prefix of a registered type name. `encode_uvarint`,
  `decode_uvarint`, `length_prefixed` and `split_length_prefixed` handle
  varints and length prefixes. `ProtoWriter` builds a message field by field
  and leaves out zero values. `ProtoReader(data).fields()` yields
  `(tag, wire_type, value)` for each field. Malformed input raises
  `DecodeError`, which is a `ValueError`.
- `tmkms.ed25519`: `PubKeyRequest`, `PubKeyResponse` and `Ed25519PublicKey`.
  `Ed25519PublicKey` only checks that the key is 32 bytes long.
  `PubKeyResponse.to_public_key()` raises `ValueError` for a key of any other
  length.
- `tmkms.ping`: `PingRequest` and `PingResponse`.
- `tmkms.proposal`: `Proposal`, `CanonicalProposal`, `SignProposalRequest` and
  `SignedProposalResponse`.
- `tmkms.vote`: `Vote`, `CanonicalVote`, `SignVoteRequest` and
  `SignedVoteResponse`.
- `tmkms.block_id`: the block ID messages `BlockId`, `PartsSetHeader`,
  `CanonicalBlockId` and `CanonicalPartSetHeader`.
- `tmkms.timestamp`: `TimeMsg`, with `from_datetime` and `to_datetime`.
- `tmkms.version`: `ConsensusVersion`.
- `tmkms.remote_error`: `RemoteError` and `RemoteErrorCode`.
  `RemoteError.double_sign(height)` builds the double-signing error.
- `tmkms.signature`: `SignedMsgType`, which has `PRE_VOTE`, `PRE_COMMIT` and
  `PROPOSAL`. `SignedMsgType.from_u32` raises `DecodeError` for any other
  value.
- `tmkms.validate`: `ValidationError`. Its `.kind` is a `ValidationErrorKind`.
  The `validate()` and `validate_basic()` methods raise it.
- `tmkms.consensus`: `ConsensusState`, `BlockId` and `PartSetHeader`, the
  parsed consensus values that the state file tracks.
- `tmkms.state`: `State`, the last signed height, round and step, kept in a
  JSON file.
- `tmkms.state_error`: `StateError`. Its `.kind` is a `StateErrorKind`.
- `tmkms.hook`: `run_hook(HookConfig(...))`, which runs an external command
  and reads the latest block height from its JSON output.
- `tmkms.networks`: `Network`, the known networks, with `chain_id()` and
  `schema_file()`.

Every request and response class has `encode()` and a `decode(data)` class
method. Registered types, such as the requests and responses, are encoded
length-prefixed and start with their Amino prefix.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

Encode a proposal request and get its sign bytes:

```python
from datetime import datetime, timezone

from tmkms.block_id import BlockId, PartsSetHeader
from tmkms.proposal import Proposal, SignProposalRequest
from tmkms.signature import SignedMsgType
from tmkms.timestamp import TimeMsg

proposal = Proposal(
    msg_type=SignedMsgType.PROPOSAL.value,
    height=12345,
    round=23456,
    pol_round=-1,
    block_id=BlockId(hash=b"hash", parts_header=PartsSetHeader(total=1_000_000, hash=b"parts_hash")),
    timestamp=TimeMsg.from_datetime(datetime(2018, 2, 11, 7, 9, 22, 765000, tzinfo=timezone.utc)),
)
request = SignProposalRequest(proposal=proposal)
wire = request.encode()                 # length-prefixed Amino bytes
assert SignProposalRequest.decode(wire) == request

legacy = request.sign_bytes("cosmoshub-3", protobuf=False)   # Amino canonical form
proto = request.sign_bytes("cosmoshub-3", protobuf=True)     # protobuf canonical form
```

`SignVoteRequest.sign_bytes` works the same way. In the Amino form, a vote
with no timestamp is signed with the zero time, 0001-01-01T00:00:00Z.

## Guarding against double signing

```python
from tmkms.state import State
from tmkms.state_error import StateError

state = State.load_state("cosmoshub-3_priv_validator_state.json")
consensus = request.consensus_state()
try:
    state.update_consensus_state(consensus)
except StateError as err:
    print(err.kind, err)
```

`load_state` creates the file at height 0 if it does not exist. It raises
`ValueError` if the file cannot be parsed. `update_consensus_state` refuses an
update that goes back in height, round or step, or that would sign a second
block ID at the same height and round. It raises `StateError` with the
matching kind. An accepted state is written to the file atomically. A write
that fails raises `StateError` with kind `SYNC_ERROR`.

To start from a height reported by an external command:

```python
from tmkms.hook import HookConfig, run_hook

output = run_hook(HookConfig(cmd=["./latest-height.sh"], timeout_secs=2))
state.update_from_hook_output(output)
```

The command must exit with status 0 and print JSON such as
`{"latest_block_height": 100}`. A failure, a timeout or unusable output raises
`HookError`. `update_from_hook_output` moves the state to the new height only
if it is ahead of the current height by less than 9000 blocks. Otherwise it
logs a warning and leaves the state unchanged.

## What the package does not do

The package is a library only. It has no command-line program, and it does
not read a configuration file. It does not connect to a validator node or
serve requests over a connection. It holds no signing keys and does not make
or check signatures: `set_signature` only stores the bytes it is given. It
does not generate configuration files for the networks that `Network` lists.