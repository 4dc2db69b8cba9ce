"""State hook support: obtain the latest block height from an external command."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field

DEFAULT_TIMEOUT_SECS = 1

# How far the hook's block height may run ahead of the last known state
BLOCK_HEIGHT_SANITY_LIMIT = 9000


class HookError(Exception):
    """The hook command failed or produced unusable output."""


@dataclass
class HookConfig:
    """Command to run, with an optional timeout in seconds."""

    cmd: list[str] = field(default_factory=list)
    timeout_secs: float | None = None
    fail_closed: bool = False


@dataclass(frozen=True)
class HookOutput:
    """Parsed JSON output of the hook command."""

    latest_block_height: int


def _parse_output(raw: bytes) -> HookOutput:
    try:
        data = json.loads(raw)
        height = data["latest_block_height"]
    except (ValueError, KeyError, TypeError) as e:
        raise HookError(f"couldn't parse hook output: {e}") from e
    if isinstance(height, bool):
        raise HookError(f"invalid block height: {height!r}")
    try:
        value = int(height)
    except (TypeError, ValueError) as e:
        raise HookError(f"invalid block height: {height!r}") from e
    if value < 0 or value >= 1 << 63:
        raise HookError(f"block height out of range: {value}")
    return HookOutput(value)


def run_hook(config: HookConfig) -> HookOutput:
    """Run the hook command and parse the last signing state it reports."""
    if not config.cmd:
        raise HookError("hook command is empty")
    timeout = DEFAULT_TIMEOUT_SECS if config.timeout_secs is None else config.timeout_secs

    try:
        proc = subprocess.Popen(list(config.cmd), stdout=subprocess.PIPE)
    except OSError as e:
        raise HookError(f"couldn't run hook command `{config.cmd[0]}`: {e}") from e

    with proc:
        try:
            stdout, _ = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            raise HookError(f"subcommand timed out after {timeout}s") from None

    if proc.returncode != 0:
        raise HookError(f"subcommand returned status {proc.returncode}")

    return _parse_output(stdout)