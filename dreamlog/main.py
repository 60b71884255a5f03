"""Main application entry point for Dreamlog."""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from .analysis.engine import DreamAnalysisEngine
from .capture.replay import TranscriptReplayCapture
from .config import DreamlogConfig
from .errors import DreamlogError
from .models.session import SessionStatus
from .services.dream_store import DreamStore
from .services.recording_session import RecordingSessionController
from .storage.file_manager import JsonDreamRepository
from .storage.repository import DreamRepository, InMemoryDreamRepository
from .ui.dream_view import render_analysis, render_dream, render_state

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(config: Optional[DreamlogConfig], level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    handlers = []

    if config is not None:
        # File handler - always write to file when a config is present
        log_file_path = config.get('logging.file_path', 'data/logs/dreamlog.log')
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    # Console handler - only if enabled in config
    if config is None or config.get('logging.console_output', True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("Dreamlog starting up")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def load_config(config_path: Optional[str]) -> Optional[DreamlogConfig]:
    """Load the config file; without an explicit path a missing file means defaults."""
    try:
        return DreamlogConfig(config_path)
    except FileNotFoundError:
        if config_path:
            raise
        return None


def create_repository(config: Optional[DreamlogConfig]) -> DreamRepository:
    if config is not None and config.get_storage_backend() == 'file':
        return JsonDreamRepository(config.get_data_directory())
    return InMemoryDreamRepository()


def create_engine(config: Optional[DreamlogConfig]) -> DreamAnalysisEngine:
    catalogue_path = config.get_catalogue_path() if config is not None else None
    return DreamAnalysisEngine.from_catalogue_path(catalogue_path)


def read_transcript(args: argparse.Namespace) -> str:
    if args.file:
        return Path(args.file).read_text(encoding='utf-8')
    return args.text or ""


def run_analyze(args: argparse.Namespace, config: Optional[DreamlogConfig]) -> int:
    """Analyze a transcript and print the result."""
    engine = create_engine(config)
    analysis = engine.analyze(read_transcript(args), args.confidence)
    console.print(render_analysis(analysis))
    return 0


def run_record(args: argparse.Namespace, config: Optional[DreamlogConfig]) -> int:
    """Replay a transcript through a recording session and save the dream."""
    capture = TranscriptReplayCapture(
        read_transcript(args),
        confidence=args.confidence,
        word_delay=args.word_delay,
    )
    if config is not None:
        controller = RecordingSessionController.from_config(capture, config)
    else:
        controller = RecordingSessionController(capture)
    store = DreamStore(create_repository(config), create_engine(config))

    try:
        result = controller.start_recording()
        if result["success"]:
            capture.wait(timeout=args.timeout)

        state = controller.state
        console.print(render_state(state))
        if state.status is not SessionStatus.COMPLETED:
            return 1

        dream_id = store.save_session(state)
        console.print(render_dream(store.get_dream(dream_id)))
        return 0
    finally:
        controller.clear_recording()
        controller.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dreamlog - voice dream journal with lucidity analysis"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: looks for dreamlog.yaml)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, else INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Dreamlog v0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (("analyze", "Analyze a dream transcript"),
                            ("record", "Replay a transcript as a recording session and save the dream")):
        sub = subparsers.add_parser(name, help=help_text)
        source = sub.add_mutually_exclusive_group(required=True)
        source.add_argument("text", nargs="?", help="Transcript text")
        source.add_argument("--file", type=str, help="Read the transcript from a file")
        sub.add_argument(
            "--confidence",
            type=float,
            default=0.9,
            help="Recognition confidence between 0 and 1 (default: 0.9)"
        )
        if name == "record":
            sub.add_argument(
                "--word-delay",
                type=float,
                default=0.05,
                help="Seconds between replayed words (default: 0.05)"
            )
            sub.add_argument(
                "--timeout",
                type=float,
                default=60.0,
                help="Maximum seconds to wait for the replay to finish (default: 60)"
            )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for Dreamlog."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        level = args.log_level or (config.get('logging.level', 'INFO') if config else 'WARNING')
        setup_logging(config, level)

        if args.command == "analyze":
            return run_analyze(args, config)
        return run_record(args, config)
    except KeyboardInterrupt:
        console.print("\nGoodbye!")
        return 130
    except (DreamlogError, ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        logging.error(f"Application error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
