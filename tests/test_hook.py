import sys

import pytest

from tmkms.hook import HookConfig, HookError, HookOutput, run_hook


def _python(code, timeout_secs=10):
    return HookConfig(cmd=[sys.executable, "-c", code], timeout_secs=timeout_secs, fail_closed=True)


def test_hook_nonexistent_command_fails():
    config = HookConfig(cmd=["todo", "real", "example"], timeout_secs=0, fail_closed=True)
    with pytest.raises(HookError):
        run_hook(config)


def test_hook_reads_string_height():
    output = run_hook(_python('print(\'{"latest_block_height": "42"}\')'))
    assert output == HookOutput(42)


def test_hook_reads_integer_height():
    output = run_hook(_python('print(\'{"latest_block_height": 7}\')'))
    assert output.latest_block_height == 7


def test_hook_nonzero_status_fails():
    with pytest.raises(HookError, match="status 3"):
        run_hook(_python("import sys; sys.exit(3)"))


def test_hook_timeout_fails():
    with pytest.raises(HookError, match="timed out"):
        run_hook(_python("import time; time.sleep(5)", timeout_secs=0.2))


def test_hook_bad_json_fails():
    with pytest.raises(HookError):
        run_hook(_python("print('not json')"))


def test_hook_missing_field_fails():
    with pytest.raises(HookError):
        run_hook(_python("print('{}')"))


def test_hook_negative_height_fails():
    with pytest.raises(HookError):
        run_hook(_python('print(\'{"latest_block_height": -1}\')'))


def test_empty_command_fails():
    with pytest.raises(HookError):
        run_hook(HookConfig(cmd=[]))