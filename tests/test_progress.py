"""tests for progress module."""

from unittest.mock import MagicMock, patch

from rich.console import Console

from groupcontent.progress import ProgressHandler


def test_progress_handler_init_defaults() -> None:
    """ProgressHandler initializes with default values."""
    handler = ProgressHandler()

    assert handler.quiet is False
    assert handler.show_progress is False


def test_progress_handler_context_manager_stops_display() -> None:
    """leaving the context stops a running display."""
    with patch("groupcontent.progress.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress

        with ProgressHandler(show_progress=True) as handler:
            handler.start_discovery()

        mock_progress.stop.assert_called_once()


def test_start_discovery_shows_spinner_when_progress_enabled() -> None:
    """start_discovery shows spinner when show_progress is True."""
    with patch("groupcontent.progress.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0

        handler = ProgressHandler(show_progress=True)
        handler.start_discovery()

        mock_progress.start.assert_called_once()
        mock_progress.add_task.assert_called_once_with(
            "Discovering entities...", total=None
        )


def test_start_discovery_does_nothing_when_progress_disabled() -> None:
    """start_discovery does nothing when show_progress is False."""
    with patch("groupcontent.progress.Progress") as mock_progress_class:
        handler = ProgressHandler(show_progress=False)
        handler.start_discovery()

        mock_progress_class.assert_not_called()


def test_set_total_replaces_spinner() -> None:
    """set_total stops the spinner and starts a determinate bar."""
    with patch("groupcontent.progress.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0

        handler = ProgressHandler(show_progress=True)
        handler.start_discovery()
        handler.set_total(10)

        assert mock_progress.stop.call_count == 1
        mock_progress.add_task.assert_called_with("Rendering", total=10, label="")


def test_adjust_total_increases_total() -> None:
    """adjust_total grows the task total."""
    with patch("groupcontent.progress.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0

        handler = ProgressHandler(show_progress=True)
        handler.set_total(10)
        handler.adjust_total(5)

        mock_progress.update.assert_called_with(0, total=15)


def test_update_advances_progress_and_sets_label() -> None:
    """update advances by one and shows the current label."""
    with patch("groupcontent.progress.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0

        handler = ProgressHandler(show_progress=True)
        handler.set_total(3)
        handler.update("Welcome")

        mock_progress.update.assert_called_with(0, advance=1, label="Welcome")


def test_update_does_nothing_without_display() -> None:
    """update is a no-op before a bar exists."""
    handler = ProgressHandler(show_progress=True)
    handler.update("ignored")  # should not raise


def test_log_error_always_prints() -> None:
    """log_error prints even in quiet mode."""
    handler = ProgressHandler(quiet=True)
    mock_console = MagicMock(spec=Console)
    handler._console = mock_console  # pylint: disable=protected-access

    handler.log_error("boom")

    mock_console.print.assert_called_once()
    assert "boom" in mock_console.print.call_args[0][0]


def test_log_info_suppressed_when_quiet() -> None:
    """log_info prints nothing in quiet mode."""
    handler = ProgressHandler(quiet=True)
    mock_console = MagicMock(spec=Console)
    handler._console = mock_console  # pylint: disable=protected-access

    handler.log_info("hello")

    mock_console.print.assert_not_called()


def test_finish_prints_summary() -> None:
    """finish prints counts unless quiet."""
    handler = ProgressHandler()
    mock_console = MagicMock(spec=Console)
    handler._console = mock_console  # pylint: disable=protected-access

    handler.finish(rendered=2, failed=1)

    mock_console.print.assert_called_once_with(
        "Processed 3 entities: 2 rendered, 1 failed"
    )


def test_finish_singular_summary() -> None:
    """a single entity is reported in the singular."""
    handler = ProgressHandler()
    mock_console = MagicMock(spec=Console)
    handler._console = mock_console  # pylint: disable=protected-access

    handler.finish(rendered=1, failed=0)

    mock_console.print.assert_called_once_with(
        "Processed 1 entity: 1 rendered, 0 failed"
    )
