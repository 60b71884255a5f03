"""Rich console rendering for dream analyses, entries and recording state."""

from typing import List

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.analysis import DreamAnalysis
from ..models.dream import DreamEntry
from ..models.session import RecordingState, SessionStatus

STATUS_STYLES = {
    SessionStatus.IDLE: "bold yellow",
    SessionStatus.RECORDING: "bold red",
    SessionStatus.TRANSCRIBING: "bold magenta",
    SessionStatus.COMPLETED: "bold green",
    SessionStatus.FAILED: "bold red",
}


def _join(items: List[str]) -> str:
    return ", ".join(items) if items else "-"


def _score_bar(value: int, maximum: int = 10) -> str:
    return "#" * value + "." * (maximum - value) + f" {value}/{maximum}"


def analysis_table(analysis: DreamAnalysis) -> Table:
    """Table of everything derived from a transcript."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Title", analysis.title)
    table.add_row("Clarity", _score_bar(analysis.clarity))
    table.add_row("Lucidity", _score_bar(analysis.lucidity))
    table.add_row("Dream signs", _join(analysis.dream_signs))
    table.add_row("Emotions", _join(analysis.emotions))
    table.add_row("Tags", _join(analysis.tags))
    for i, check in enumerate(analysis.reality_checks, 1):
        table.add_row(f"Reality check {i}", check)
    return table


def render_analysis(analysis: DreamAnalysis) -> Panel:
    return Panel(analysis_table(analysis), title="Dream Analysis", style="bright_blue")


def render_dream(entry: DreamEntry) -> Panel:
    """Panel showing a stored dream with its transcript."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Recorded", entry.recorded_at.strftime("%Y-%m-%d %H:%M"))
    table.add_row("Duration", f"{entry.duration}s")
    table.add_row("Clarity", _score_bar(entry.clarity))
    table.add_row("Lucidity", _score_bar(entry.lucidity))
    table.add_row("Dream signs", _join(entry.dream_signs))
    table.add_row("Emotions", _join(entry.emotions))
    table.add_row("Tags", _join(entry.tags))
    table.add_row("Reality checks", "\n".join(entry.reality_checks) or "-")

    transcript = Text(entry.transcription, style="italic")
    return Panel(Group(table, Text(""), transcript), title=entry.title, subtitle=entry.id, style="bright_blue")


def render_state(state: RecordingState) -> Text:
    """One-line status of the recording session."""
    text = Text.assemble(
        (state.status_message, STATUS_STYLES[state.status]),
        "  |  ",
        f"Duration: {state.duration}s",
    )
    if state.partial_transcript:
        text.append(f"  |  {state.partial_transcript}", style="dim")
    return text
