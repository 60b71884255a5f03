"""Tests for the command line entry point."""

import logging
from pathlib import Path

import pytest

from dreamlog.main import build_parser, main, setup_logging

CRYSTAL_CAVE = "I was flying through a crystal cave. It was vivid and full of color."


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run from an empty directory so no dreamlog.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.mark.unit
class TestParser:

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_text_and_file_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze", "text", "--file", "dream.txt"])

    def test_record_options(self):
        args = build_parser().parse_args(["record", "--file", "dream.txt", "--word-delay", "0"])

        assert args.command == "record"
        assert args.file == "dream.txt"
        assert args.word_delay == 0.0
        assert args.confidence == 0.9


@pytest.mark.unit
class TestMain:

    def test_analyze_text(self, workdir, capsys):
        assert main(["analyze", CRYSTAL_CAVE]) == 0

        output = capsys.readouterr().out
        assert "Dream Analysis" in output
        assert "I was flying through a crystal cave" in output
        assert "Try to fly by jumping up" in output

    def test_analyze_file(self, workdir, capsys):
        (workdir / "dream.txt").write_text("I was at school again", encoding="utf-8")

        assert main(["analyze", "--file", "dream.txt"]) == 0
        assert "school" in capsys.readouterr().out

    def test_analyze_missing_file(self, workdir, capsys):
        assert main(["analyze", "--file", "missing.txt"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_missing_explicit_config(self, workdir):
        assert main(["--config", "nope.yaml", "analyze", "text"]) == 1

    def test_record_saves_dream(self, workdir, capsys):
        assert main(["record", CRYSTAL_CAVE, "--word-delay", "0.001", "--confidence", "0.95"]) == 0

        output = capsys.readouterr().out
        assert "Dream captured successfully" in output
        assert "I was flying through a crystal cave" in output

    def test_record_without_speech_fails(self, workdir, capsys):
        assert main(["record", "", "--word-delay", "0.001"]) == 1
        assert "No speech detected" in capsys.readouterr().out

    def test_record_with_file_backend(self, workdir, config_file):
        config_file(
            "storage:\n"
            "  backend: file\n"
            "  data_directory: journal\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  file_path: journal/logs/dreamlog.log\n"
            "  console_output: false\n"
        )

        assert main(["record", "flying over water", "--word-delay", "0.001"]) == 0

        dreams = list((workdir / "journal" / "dreams").glob("*.json"))
        assert len(dreams) == 1
        assert (workdir / "journal" / "logs" / "dreamlog.log").exists()


@pytest.mark.unit
class TestSetupLogging:

    def test_console_only_without_config(self):
        setup_logging(None, "INFO")

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert [type(h) for h in root.handlers] == [logging.StreamHandler]
        assert root.handlers[0].level == logging.WARNING

    def test_file_handler_with_config(self, config_file, tmp_path):
        from dreamlog.config import DreamlogConfig

        config = DreamlogConfig(str(config_file("logging:\n  file_path: logs/app.log\n  console_output: false\n")))
        setup_logging(config, "DEBUG")

        root = logging.getLogger()
        assert [type(h) for h in root.handlers] == [logging.FileHandler]
        assert Path(root.handlers[0].baseFilename) == tmp_path / "logs" / "app.log"
