"""Tests for the clean command wiring."""

from pathlib import Path

from pytest_mock import MockerFixture

from tagsweep.application.services.clean_service import CleanMode
from tagsweep.config.config import Config
from tagsweep.ui.cli.args.options import CleanArgs
from tagsweep.ui.cli.commands import CleanCommand


def _args(**overrides: object) -> CleanArgs:
    fields: dict[str, object] = {
        "command": "clean",
        "source_path": Path("in"),
        "output_path": Path("out"),
        "mode": CleanMode.FILES,
        "quality": None,
        "batch": False,
        "year": None,
        "genre": None,
        "workers": None,
        "temp_dir": None,
        "verbose": False,
        "quiet": False,
    }
    fields.update(overrides)
    return CleanArgs(**fields)  # pyright: ignore[reportArgumentType]


def test_request_combines_config_and_arguments(mocker: MockerFixture) -> None:
    config = Config(jpeg_quality=60, cover_file_name="folder.jpg", workers=2)

    command = CleanCommand(
        _args(quality=85, batch=True, year=2001, genre="Jazz", temp_dir=Path("tmp")),
        app=mocker.Mock(),
        config=config,
    )

    request = command.request
    assert request.settings.jpeg_quality == 85
    assert request.settings.cover_file_name == "folder.jpg"
    assert request.settings.workers == 2
    assert request.mode is CleanMode.FILES
    assert not request.interactive
    assert request.default_year == 2001
    assert request.default_genre == "Jazz"
    assert request.temp_dir == Path("tmp")


def test_execute_runs_service_and_shows_results(mocker: MockerFixture) -> None:
    app = mocker.Mock()
    display = mocker.patch("tagsweep.ui.cli.commands.clean.ResultDisplay")

    command = CleanCommand(_args(quiet=True), app=app, config=Config())
    outcome = command.execute()

    app.run.assert_called_once_with(command.request)
    assert outcome is app.run.return_value
    display.return_value.show_results.assert_called_once_with(outcome, quiet=True)
