"""Terminal rendering for Dreamlog."""

from .dream_view import render_analysis, render_dream, render_state

__all__ = [
    "render_analysis",
    "render_dream",
    "render_state",
]
