"""Errors raised by chain state tracking (double-sign protection)."""

from __future__ import annotations

import enum


class StateErrorKind(enum.Enum):
    """Kinds of state errors."""

    HEIGHT_REGRESSION = "height regression"
    STEP_REGRESSION = "step regression"
    ROUND_REGRESSION = "round regression"
    DOUBLE_SIGN = "double sign detected"
    SYNC_ERROR = "error syncing state to disk"


class StateError(Exception):
    """A consensus state update was refused or could not be persisted."""

    def __init__(self, kind: StateErrorKind, message: str | None = None) -> None:
        text = f"{kind.value}: {message}" if message else kind.value
        super().__init__(text)
        self.kind = kind
        self.message = message