# tests/unit/cli/test_output_manager.py
# Unit tests for OutputManager implementation

from unittest.mock import patch

from justlog.cli.output_manager import OutputManager
from justlog.core.output import OutputInterface, OutputLevel


class TestOutputManagerBasics:

    # * Verify OutputManager implements protocol
    def test_implements_protocol(self):
        assert isinstance(OutputManager(), OutputInterface)

    # * Verify default level is NORMAL
    def test_default_level_is_normal(self):
        assert OutputManager().get_level() == OutputLevel.NORMAL


class TestInitialize:

    # * Verify VERBOSE level
    def test_verbose_level(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.VERBOSE)
        assert manager.is_verbose_enabled() is True
        assert manager.is_debug_enabled() is False

    # * Verify DEBUG requires the debug flag
    def test_debug_requires_flag(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.DEBUG, debug=False)
        assert manager.get_level() == OutputLevel.VERBOSE

    # * Verify DEBUG w/ debug flag
    def test_debug_with_flag(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.DEBUG, debug=True)
        assert manager.is_debug_enabled() is True

    # * Verify --quiet overrides everything
    def test_quiet_overrides_everything(self):
        manager = OutputManager()
        manager.initialize(requested_level=OutputLevel.DEBUG, debug=True, quiet=True)
        assert manager.get_level() == OutputLevel.QUIET


class TestOutputMethods:

    # * Verify debug only at DEBUG level
    def test_debug_only_at_debug_level(self):
        manager = OutputManager()

        with patch("justlog.justlog_io.console.console") as mock_console:
            manager.initialize(requested_level=OutputLevel.NORMAL)
            manager.debug("test message")
            mock_console.print.assert_not_called()

            manager.initialize(requested_level=OutputLevel.DEBUG, debug=True)
            manager.debug("test message")
            mock_console.print.assert_called_once()

    # * Verify verbose prints message & each detail line
    def test_verbose_with_detail(self):
        manager = OutputManager()

        with patch("justlog.justlog_io.console.console") as mock_console:
            manager.initialize(requested_level=OutputLevel.VERBOSE)
            manager.verbose("Persisted 6 keys", "STORE", "a\nb")
            assert mock_console.print.call_count == 3

    # * Verify warnings are silenced by --quiet
    def test_warning_quiet(self):
        manager = OutputManager()

        with patch("justlog.justlog_io.console.console") as mock_console:
            manager.initialize(quiet=True)
            manager.warning("careful")
            mock_console.print.assert_not_called()


class TestFileLogging:

    # * Verify verbose messages reach the log file
    def test_log_file_receives_verbose(self, tmp_path):
        log_file = tmp_path / "logs" / "justlog.log"
        manager = OutputManager()

        with patch("justlog.justlog_io.console.console"):
            manager.initialize(requested_level=OutputLevel.VERBOSE, log_file=log_file)
            manager.begin_run()
            manager.verbose("pause: active -> paused", "SESSION")
            manager.end_run()

        content = log_file.read_text(encoding="utf-8")
        assert "[SESSION] pause: active -> paused" in content
        assert "Run Started" in content
        assert "Run Ended" in content

    # * Verify cleanup is idempotent
    def test_cleanup_idempotent(self, tmp_path):
        manager = OutputManager()
        manager.initialize(log_file=tmp_path / "x.log")
        manager.cleanup()
        manager.cleanup()
