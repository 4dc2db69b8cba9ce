"""Synchronized consensus state tracking for double-signing protection."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .consensus import ConsensusState
from .hook import BLOCK_HEIGHT_SANITY_LIMIT, HookOutput
from .state_error import StateError, StateErrorKind

log = logging.getLogger(__name__)


class State:
    """Last signed consensus state, persisted to a JSON file."""

    def __init__(self, consensus_state: ConsensusState, state_file_path: str | os.PathLike) -> None:
        self.consensus_state = consensus_state
        self.state_file_path = Path(state_file_path)

    @classmethod
    def load_state(cls, path: str | os.PathLike) -> "State":
        """Load state from ``path``, creating an initial state file if missing."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls._write_initial_state(path)
        try:
            consensus_state = ConsensusState.from_dict(json.loads(text))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"error parsing {path}: {e}") from e
        return cls(consensus_state, path)

    def update_consensus_state(self, new_state: ConsensusState) -> None:
        """Check the new height, round and step against the last ones, then persist."""
        old = self.consensus_state
        if new_state.height < old.height:
            raise StateError(
                StateErrorKind.HEIGHT_REGRESSION,
                f"last height:{old.height} new height:{new_state.height}",
            )
        if new_state.height == old.height:
            if new_state.round < old.round:
                raise StateError(
                    StateErrorKind.ROUND_REGRESSION,
                    f"round regression at height:{new_state.height} "
                    f"last round:{old.round} new round:{new_state.round}",
                )
            if new_state.round == old.round:
                if new_state.step < old.step:
                    raise StateError(
                        StateErrorKind.STEP_REGRESSION,
                        f"round regression at height:{new_state.height} "
                        f"round:{new_state.round} last step:{old.step} "
                        f"new step:{new_state.step}",
                    )
                if new_state.block_id != old.block_id and (
                    # two different block IDs during different steps
                    (new_state.block_id is not None and old.block_id is not None)
                    # `<nil>` and a block ID on the same step
                    or new_state.step == old.step
                ):
                    raise StateError(
                        StateErrorKind.DOUBLE_SIGN,
                        f"Attempting to sign a second proposal at height:{new_state.height} "
                        f"round:{new_state.round} step:{new_state.step} "
                        f"old block id:{old.block_id_prefix()} "
                        f"new block {new_state.block_id_prefix()}",
                    )

        self.consensus_state = new_state
        try:
            self._sync_to_disk()
        except OSError as e:
            raise StateError(
                StateErrorKind.SYNC_ERROR,
                f"error writing state to {self.state_file_path}: {e}",
            ) from e

    def update_from_hook_output(self, output: HookOutput) -> None:
        """Advance the height from a hook's output, within the sanity limit."""
        hook_height = output.latest_block_height
        last_height = self.consensus_state.height

        if hook_height > last_height:
            delta = hook_height - last_height
            if delta < BLOCK_HEIGHT_SANITY_LIMIT:
                self.consensus_state = ConsensusState(height=hook_height)
                log.info("updated block height from hook: %s", hook_height)
            else:
                log.warning(
                    "hook block height more than sanity limit: %s (delta: %s, max: %s)",
                    hook_height,
                    delta,
                    BLOCK_HEIGHT_SANITY_LIMIT,
                )
        else:
            log.warning(
                "hook block height less than current? current: %s, hook: %s",
                last_height,
                hook_height,
            )

    @classmethod
    def _write_initial_state(cls, path: Path) -> "State":
        state = cls(ConsensusState(height=0), path)
        state._sync_to_disk()
        return state

    def _sync_to_disk(self) -> None:
        log.debug(
            "writing new consensus state to %s: %r", self.state_file_path, self.consensus_state
        )
        data = json.dumps(self.consensus_state.to_dict())
        directory = self.state_file_path.parent
        fd, tmp_name = tempfile.mkstemp(dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.replace(tmp_name, self.state_file_path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
        log.debug("successfully wrote new consensus state to %s", self.state_file_path)