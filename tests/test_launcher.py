"""Tests for launcher.py — argument parsing and the main entry point."""
import logging
from unittest.mock import patch, MagicMock

import pytest

import launcher
from conftest import FakeRunner


@pytest.fixture
def quiet_main(healthy_responses):
    """Patch logging setup and the process runner so main() stays local."""
    fake = FakeRunner(healthy_responses)
    with patch.object(launcher, 'setup_logging') as mock_setup, \
         patch.object(launcher, 'default_log_path', return_value="/tmp/netreport-test.log"), \
         patch.object(launcher, 'ProcessRunner', return_value=fake) as mock_runner:
        yield mock_setup, mock_runner, fake


class TestParseArgs:
    def test_no_arguments(self):
        args = launcher.parse_args([])
        assert args.config is None
        assert args.debug is False
        assert args.json_logs is False

    def test_flags(self):
        args = launcher.parse_args(["--config", "x.json", "--debug", "--json-logs"])
        assert args.config == "x.json"
        assert args.debug
        assert args.json_logs

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            launcher.parse_args(["--version"])
        assert exc.value.code == 0
        assert "netreport" in capsys.readouterr().out


class TestMain:
    def test_prints_report_and_exits_zero(self, quiet_main, capsys, tmp_path):
        with patch('netreport.utils.common.CONFIG_PATH', str(tmp_path / "none.json")):
            assert launcher.main([]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Relatório de Rede - ")
        assert "Interface padrão: wlan0" in out
        assert "freq: 5180 MHz" in out

    def test_exit_zero_when_everything_fails(self, quiet_main, capsys, tmp_path):
        _, _, fake = quiet_main
        fake.responses.clear()
        with patch('netreport.utils.common.CONFIG_PATH', str(tmp_path / "none.json")):
            assert launcher.main([]) == 0
        out = capsys.readouterr().out
        assert "CIDR error: get default interface:" in out
        assert "CIDR not found" in out
        assert "wifi interface not found" in out
        assert "speedtest error:" in out

    def test_default_logging_levels(self, quiet_main, tmp_path):
        mock_setup, _, _ = quiet_main
        with patch('netreport.utils.common.CONFIG_PATH', str(tmp_path / "none.json")):
            launcher.main([])
        kwargs = mock_setup.call_args[1]
        assert kwargs["console_level"] == logging.WARNING
        assert kwargs["level"] == logging.INFO
        assert kwargs["structured"] is False
        assert kwargs["log_file"] == "/tmp/netreport-test.log"

    def test_debug_flag(self, quiet_main, tmp_path):
        mock_setup, _, _ = quiet_main
        with patch('netreport.utils.common.CONFIG_PATH', str(tmp_path / "none.json")):
            launcher.main(["--debug", "--json-logs"])
        kwargs = mock_setup.call_args[1]
        assert kwargs["console_level"] == logging.DEBUG
        assert kwargs["structured"] is True

    def test_config_timeout_reaches_runner(self, quiet_main, tmp_config, capsys):
        _, mock_runner, _ = quiet_main
        launcher.main(["--config", tmp_config])
        mock_runner.assert_called_once_with(timeout=60)
        assert capsys.readouterr().out.startswith("Network Report - ")

    def test_unwritable_log_dir_still_reports(self, healthy_responses, capsys, tmp_path):
        fake = FakeRunner(healthy_responses)
        with patch('netreport.utils.common.LOG_DIR', '/dev/null/netreport/logs'), \
             patch('netreport.utils.common.CONFIG_PATH', str(tmp_path / "none.json")), \
             patch.object(launcher, 'setup_logging') as mock_setup, \
             patch.object(launcher, 'ProcessRunner', return_value=fake):
            assert launcher.main([]) == 0
        assert mock_setup.call_args[1]["log_file"] is None
        assert capsys.readouterr().out.startswith("Relatório de Rede - ")
