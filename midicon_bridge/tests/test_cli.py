"""
Tests for the command line entry point.
"""

from unittest import mock

from midicon_bridge import cli
from midicon_bridge.config import BridgeConfig, load_config


class TestArguments:
    """Test argument parsing and overrides."""

    def test_overrides_win(self):
        args = cli.build_parser().parse_args(
            ["--console-host", "10.1.1.1", "--console-port", "9001", "--midi-input", "X"]
        )
        config = cli.apply_overrides(BridgeConfig(), args)
        assert config.console_host == "10.1.1.1"
        assert config.console_port == 9001
        assert config.midi_input == "X"
        assert config.midi_output == "MIDIcon 2"

    def test_no_overrides(self):
        args = cli.build_parser().parse_args([])
        assert cli.apply_overrides(BridgeConfig(), args) == BridgeConfig()


class TestMain:
    """Test main() paths that exit before running the bridge."""

    def test_write_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        assert cli.main(["--config", str(path), "--session-url", "ws://console:8080/", "--write-config"]) == 0
        assert load_config(path).session_url == "ws://console:8080/"

    def test_invalid_config_exit_code(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("nonsense: 1\n")
        assert cli.main(["--config", str(path)]) == 2

    def test_list_ports(self, capsys):
        with mock.patch.object(cli, "list_available_ports", return_value=(["In A"], [])):
            assert cli.main(["--list-ports"]) == 0
        out = capsys.readouterr().out
        assert "1. In A" in out
        assert "(none)" in out

    def test_runs_until_session_closes(self, tmp_path):
        with mock.patch.object(cli, "BridgeApp") as app_cls, mock.patch.object(cli, "signal"):
            assert cli.main(["--config", str(tmp_path / "none.yaml")]) == 0
            app = app_cls.return_value
            app.start.assert_called_once()
            app.run.assert_called_once()
            app.stop.assert_called_once()


    def test_signal_handler_stops_run_loop(self, tmp_path):
        with mock.patch.object(cli, "BridgeApp") as app_cls, mock.patch.object(cli, "signal") as sig:
            cli.main(["--config", str(tmp_path / "none.yaml")])
            handler = sig.signal.call_args_list[0][0][1]
            handler(sig.SIGINT, None)
            app_cls.return_value.controller.stop.assert_called_once()


class TestBridgeApp:
    """Test transport start-up."""

    def test_missing_surface_keeps_bridge_running(self):
        app = cli.BridgeApp(BridgeConfig())
        with mock.patch.object(app.midi, "connect", return_value=False), \
                mock.patch.object(app.console, "start", return_value=True), \
                mock.patch.object(app.remote, "start") as remote_start:
            app.start()

        remote_start.assert_called_once_with(on_event=app.controller.submit)
        assert app.controller.is_running
