"""Validation errors for consensus messages."""

from __future__ import annotations

import enum


class ValidationErrorKind(enum.Enum):
    """Kinds of validation errors."""

    INVALID_MESSAGE_TYPE = "invalid Type"
    MISSING_CONSENSUS_MESSAGE = "consensus message is missing"
    NEGATIVE_HEIGHT = "negative height"
    NEGATIVE_ROUND = "negative round"
    NEGATIVE_POL_ROUND = "negative POLRound (exception: -1)"
    NEGATIVE_VALIDATOR_INDEX = "negative ValidatorIndex"
    INVALID_VALIDATOR_ADDRESS_SIZE = "expected ValidatorAddress size to be 20 bytes"
    INVALID_HASH_SIZE = "Wrong hash: expected Hash size to be 32 bytes"
    NEGATIVE_TOTAL = "negative total"


class ValidationError(ValueError):
    """A consensus message failed basic validation."""

    def __init__(self, kind: ValidationErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind