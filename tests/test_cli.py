"""Tests for the tailscan command line."""

import argparse
import json
from unittest.mock import patch

import pytest

from tailscan import cli
from tailscan.config import load_config


def test_one_shot_copy(log_file):
    log_file.write_bytes(b"hello\n")

    code = cli.main(["-F", str(log_file), "-D", "0"])

    assert code == 0
    assert (log_file.parent / "result_0_app.log").read_bytes() == b"hello\n"


def test_missing_source_exits_non_zero(tmp_path, capsys):
    code = cli.main(["-F", str(tmp_path / "missing.log")])

    assert code == 1
    assert "open failed" in capsys.readouterr().err


def test_filepath_required():
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_invalid_interval_is_usage_error(log_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-F", str(log_file), "-I", "0"])
    assert excinfo.value.code == 2


def test_missing_config_is_usage_error(log_file, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-F", str(log_file), "-c", str(tmp_path / "none.json")])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert "tailscan" in capsys.readouterr().out


def test_flags_override_config(tmp_path, log_file):
    path = tmp_path / "tailscan.json"
    path.write_text(json.dumps({"session": {"duration": 9, "interval": 3, "max_retry": 7}}))

    with patch("tailscan.cli.run_session") as run_session:
        code = cli.main(["-F", str(log_file), "-c", str(path), "-I", "1", "-S", "4"])

    assert code == 0
    _, settings, config = run_session.call_args.args
    assert settings.interval == 1
    assert settings.size_ceiling == 4 * 1024 * 1024
    assert settings.stale_ceiling == 7
    assert config["session"] == {"duration": 9, "interval": 1.0, "max_size_mb": 4.0, "max_retry": 7}


def test_apply_overrides_ignores_unset_flags():
    args = argparse.Namespace(duration=None, interval=None, max_size_mb=None, max_retry=2)

    config = cli.apply_overrides(load_config(), args)

    assert config["session"]["interval"] == 10
    assert config["session"]["max_retry"] == 2


def test_test_alert_does_not_need_filepath(capsys):
    assert cli.main(["--test-alert"]) == 0
    out = capsys.readouterr().out
    assert "Test alert" in out


def test_keyboard_interrupt_stops_cleanly(log_file, capsys):
    with patch("tailscan.cli.run_session", side_effect=KeyboardInterrupt):
        assert cli.main(["-F", str(log_file), "-D", "60"]) == 0
    assert "Stopped by user" in capsys.readouterr().out


@pytest.mark.parametrize("flags", [
    ["-D", "nan"],
    ["-D", "inf"],
    ["-I", "nan"],
    ["-S", "inf"],
])
def test_non_finite_values_are_usage_errors(log_file, flags):
    with patch("tailscan.cli.run_session") as run_session:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["-F", str(log_file), "-D", "5"] + flags)

    assert excinfo.value.code == 2
    run_session.assert_not_called()
