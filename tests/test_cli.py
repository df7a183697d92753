"""Smoke tests for the hostwatch command line."""

from unittest.mock import MagicMock, patch

import pytest

from hostwatch import cli
from hostwatch.scheduler import Scheduler

URL = "https://alerts.example.com/webhook/abc"


@pytest.fixture(autouse=True)
def quiet(monkeypatch):
    """Keep tests off the real .env, logging handlers and hostname."""
    for name in ("URL", "INTERVAL", "CPU_LIMIT", "MEMORY_LIMIT", "DISK_LIMIT", "MOUNT_ROOT"):
        monkeypatch.delenv(f"HOSTWATCH_{name}", raising=False)
    with patch("hostwatch.cli.load_env"), patch("hostwatch.cli.setup_logging"), patch(
        "hostwatch.cli.resolve_hostname", return_value="web-1"
    ):
        yield


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = cli.build_parser().parse_args(["--url", URL])
        config = cli.config_from_args(args)
        assert config.url == URL
        assert config.interval == 300
        assert config.cpu_limit == pytest.approx(90.0)
        assert config.memory_limit == pytest.approx(90.0)
        assert config.disk_limit == pytest.approx(85.0)
        assert config.mount_root == "/mnt"

    def test_flags(self):
        args = cli.build_parser().parse_args(
            ["--url", URL, "--interval", "60", "--cpu-limit", "75", "--disk-limit", "80"]
        )
        config = cli.config_from_args(args)
        assert config.interval == 60
        assert config.cpu_limit == pytest.approx(75.0)
        assert config.disk_limit == pytest.approx(80.0)

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("HOSTWATCH_URL", URL)
        monkeypatch.setenv("HOSTWATCH_INTERVAL", "120")
        monkeypatch.setenv("HOSTWATCH_MEMORY_LIMIT", "95")
        config = cli.config_from_args(cli.build_parser().parse_args([]))
        assert config.url == URL
        assert config.interval == 120
        assert config.memory_limit == pytest.approx(95.0)

    def test_flag_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("HOSTWATCH_INTERVAL", "120")
        args = cli.build_parser().parse_args(["--url", URL, "--interval", "30"])
        assert args.interval == 30


class TestMain:
    """Tests for main()."""

    def test_missing_url_exits_before_scheduling(self):
        with patch("hostwatch.cli.build_scheduler") as build:
            assert cli.main([]) == 1
        build.assert_not_called()

    def test_out_of_range_limit_exits(self):
        with patch("hostwatch.cli.build_scheduler") as build:
            assert cli.main(["--url", URL, "--cpu-limit", "150"]) == 1
        build.assert_not_called()

    def test_once_runs_single_cycle(self):
        scheduler = MagicMock()
        with patch("hostwatch.cli.build_scheduler", return_value=scheduler):
            assert cli.main(["--url", URL, "--once"]) == 0
        scheduler.run.assert_called_once_with(max_cycles=1)

    def test_keyboard_interrupt_exits_cleanly(self):
        scheduler = MagicMock()
        scheduler.run.side_effect = KeyboardInterrupt
        with patch("hostwatch.cli.build_scheduler", return_value=scheduler), patch(
            "hostwatch.cli.signal.signal"
        ):
            assert cli.main(["--url", URL]) == 0
        scheduler.stop.assert_called_once()

    def test_keyboard_interrupt_during_single_cycle(self):
        scheduler = MagicMock()
        scheduler.run.side_effect = KeyboardInterrupt
        with patch("hostwatch.cli.build_scheduler", return_value=scheduler):
            assert cli.main(["--url", URL, "--once"]) == 0
        scheduler.stop.assert_called_once()

    def test_build_scheduler(self):
        config = cli.config_from_args(
            cli.build_parser().parse_args(["--url", URL, "--interval", "60"])
        )
        scheduler = cli.build_scheduler(config, "web-1")
        assert isinstance(scheduler, Scheduler)
        assert scheduler.interval == 60
        assert len(scheduler.tracker) == 0
