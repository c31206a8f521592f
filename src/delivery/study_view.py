"""
Terminal views for the vocab study session.

Turns a SessionView into Rich renderables. Nothing here mutates session
state; the CLI loop feeds user input back to the runtime as messages.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from src.study.challenge import Challenge
from src.study.controller import SessionPhase, SessionView

# =============================================================================
# COLOR THEME
# =============================================================================

STUDY_THEME = {
    "primary": "#00BFFF",  # Deep sky blue - prompts
    "success": "#00FF88",  # Neon green - verdicts
    "warning": "#FFD700",  # Gold - hints
    "error": "#FF3366",  # Red - failures
    "dim": "#7A8899",  # Slate - secondary text
    "white": "#F0F0F0",
}

STYLES = {
    "primary": Style(color=STUDY_THEME["primary"], bold=True),
    "success": Style(color=STUDY_THEME["success"], bold=True),
    "warning": Style(color=STUDY_THEME["warning"]),
    "error": Style(color=STUDY_THEME["error"], bold=True),
    "dim": Style(color=STUDY_THEME["dim"]),
    "text": Style(color=STUDY_THEME["white"]),
}

HOME_TITLE = "Welcome to Grow My Vocab!"
HOME_TAGLINE = "Expand your vocabulary with fun and engaging exercises every day."


# =============================================================================
# PANELS
# =============================================================================


def render_home() -> Panel:
    content = Text(justify="center")
    content.append(f"{HOME_TITLE}\n\n", style=STYLES["primary"])
    content.append(HOME_TAGLINE, style=STYLES["text"])
    content.append("\n\nRun ", style=STYLES["dim"])
    content.append("vocab study", style=STYLES["warning"])
    content.append(" to start a session.", style=STYLES["dim"])
    return Panel(Align.center(content), box=box.DOUBLE, border_style=STYLES["primary"], padding=(1, 4))


def render_session(view: SessionView) -> RenderableType:
    """Pick the panel for the current phase."""
    if view.phase == SessionPhase.PRESENTING:
        return challenge_panel(view)
    if view.phase == SessionPhase.SHOWING_OUTCOME:
        return outcome_panel(view)
    if view.phase == SessionPhase.FAILED:
        return error_panel(view.error)
    return loading_panel()


def loading_panel() -> Panel:
    return Panel(
        Text("Loading challenges...", style=STYLES["dim"]),
        border_style=STYLES["dim"],
        box=box.ROUNDED,
    )


def challenge_panel(view: SessionView) -> Panel:
    """
    Challenge prompt with the translate line, word count and revealed hints.

    Args:
        view: Current session view (phase PRESENTING)

    Returns:
        Rich Panel
    """
    lines: list[RenderableType] = [Text(view.prompt, style=STYLES["text"])]

    details = Text()
    if view.first_language_text:
        details.append(f"Translate: {view.first_language_text}\n", style=STYLES["dim"])
    details.append(f"Words in phrase: {view.word_count}", style=STYLES["dim"])
    lines.append(details)

    for hint in view.revealed_hints:
        lines.append(Text(f"  {hint}", style=STYLES["warning"]))

    footer = Text()
    if view.submitting:
        footer.append("Checking... ", style=STYLES["dim"])
    if view.has_more_hints:
        footer.append("'h' = give me a hint  ", style=STYLES["dim"])
    footer.append("'q' = quit", style=STYLES["dim"])
    lines.append(footer)

    return Panel(
        Group(*lines),
        title=Text("Let's Do This", style=STYLES["primary"]),
        title_align="left",
        border_style=STYLES["primary"],
        box=box.HEAVY,
        padding=(1, 2),
    )


def outcome_panel(view: SessionView) -> Panel:
    content = Text()
    content.append(view.verdict, style=STYLES["success"])
    if view.draft:
        content.append("\n\nYour answer: ", style=STYLES["dim"])
        content.append(view.draft, style=STYLES["text"])
    content.append("\n\nPress Enter for the next challenge ('q' = quit)", style=STYLES["dim"])
    return Panel(content, border_style=STYLES["success"], box=box.HEAVY, padding=(1, 2))


def error_panel(message: str) -> Panel:
    content = Text()
    content.append(message or "Something went wrong.", style=STYLES["error"])
    content.append("\n\nPress Enter to retry ('q' = quit)", style=STYLES["dim"])
    return Panel(
        content,
        title=Text("Error", style=STYLES["error"]),
        title_align="left",
        border_style=STYLES["error"],
        box=box.HEAVY,
        padding=(1, 2),
    )


def batch_table(challenges: Sequence[Challenge], subject_id: int) -> Table:
    table = Table(title=f"Study list for subject {subject_id}", box=box.SIMPLE_HEAVY)
    table.add_column("Vocab", justify="right")
    table.add_column("Study", justify="right")
    table.add_column("Prompt")
    table.add_column("Translate")
    table.add_column("Words", justify="right")
    for challenge in challenges:
        table.add_row(
            str(challenge.vocab_id),
            str(challenge.vocab_study_id),
            challenge.prompt,
            challenge.first_language_text,
            str(challenge.word_count),
        )
    return table
