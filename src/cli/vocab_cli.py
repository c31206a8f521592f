"""
Vocab CLI - Terminal vocabulary study sessions.

Usage:
    vocab home                    # Welcome screen
    vocab study                   # Start a study session
    vocab study --offline         # Study from the local deck
    vocab study -s 2 -n 10        # Subject 2, 10 challenges per batch
    vocab fetch -n 3              # Print one study batch (service probe)
"""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.prompt import Prompt

from config import Settings, get_settings
from src.core.logging_config import configure_logging
from src.core.modes import OperatingMode, detect_mode, get_study_service
from src.delivery.study_view import (
    batch_table,
    render_home,
    render_session,
)
from src.study.controller import SessionPhase, StudySessionController
from src.study.messages import (
    AdvanceRequested,
    DraftAnswerChanged,
    HintRequested,
    SubmitRequested,
)
from src.study.runtime import StudyRuntime
from src.study.service import StudyServiceError

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="vocab",
    help="Grow My Vocab - terminal vocabulary study sessions",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

QUIT_INPUTS = {"q", "quit", "exit"}
HINT_INPUTS = {"h", "hint"}

SubjectOption = Annotated[
    int | None, typer.Option("--subject", "-s", help="Subject (learner) id to study")
]
LimitOption = Annotated[
    int | None, typer.Option("--limit", "-n", min=1, help="Challenges per batch")
]
OfflineOption = Annotated[
    bool, typer.Option("--offline", help="Use the local deck instead of the study service")
]
UrlOption = Annotated[
    str | None, typer.Option("--url", help="GraphQL endpoint of the study service")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Grow My Vocab - terminal vocabulary study sessions."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_file)


def _resolve(
    subject: int | None,
    limit: int | None,
    url: str | None,
) -> Settings:
    """Apply command-line overrides on top of the environment settings."""
    overrides: dict[str, object] = {}
    if subject is not None:
        overrides["subject_id"] = subject
    if limit is not None:
        overrides["batch_limit"] = limit
    if url is not None:
        overrides["gql_url"] = url
    return get_settings().model_copy(update=overrides)


def _mode(settings: Settings, offline: bool) -> OperatingMode:
    return OperatingMode.OFFLINE if offline else detect_mode(settings)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def home() -> None:
    """Show the welcome screen."""
    console.print(render_home())


@app.command()
def study(
    subject: SubjectOption = None,
    limit: LimitOption = None,
    offline: OfflineOption = False,
    url: UrlOption = None,
) -> None:
    """
    Start a study session.

    Type an answer and press Enter to check it. 'h' reveals a hint,
    'q' quits. After each verdict press Enter for the next challenge.
    """
    settings = _resolve(subject, limit, url)
    try:
        asyncio.run(_run_study_session(settings, _mode(settings, offline)))
    except StudyServiceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[dim]Session ended.[/dim]")


@app.command()
def fetch(
    subject: SubjectOption = None,
    limit: LimitOption = None,
    offline: OfflineOption = False,
    url: UrlOption = None,
) -> None:
    """Fetch one study batch and print it."""
    settings = _resolve(subject, limit, url)
    try:
        challenges = asyncio.run(_fetch_batch(settings, _mode(settings, offline)))
    except StudyServiceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not challenges:
        console.print(f"[yellow]No challenges for subject {settings.subject_id}.[/yellow]")
        return
    console.print(batch_table(challenges, settings.subject_id))


# =============================================================================
# Session loop
# =============================================================================


async def _fetch_batch(settings: Settings, mode: OperatingMode):
    service = get_study_service(settings, mode)
    try:
        return await service.fetch_batch(settings.subject_id, settings.batch_limit)
    finally:
        await service.close()


async def _run_study_session(settings: Settings, mode: OperatingMode) -> None:
    """Drive one session until the learner quits."""
    service = get_study_service(settings, mode)
    controller = StudySessionController(
        subject_id=settings.subject_id,
        limit=settings.batch_limit,
    )
    runtime = StudyRuntime(controller, service)

    try:
        runtime.begin()
        with console.status("[dim]Loading challenges...[/dim]", spinner="dots"):
            await runtime.settle()

        while True:
            view = controller.view()
            console.print(render_session(view))

            if view.phase == SessionPhase.PRESENTING:
                user_input = Prompt.ask("[cyan]answer[/cyan]", default="", show_default=False)
                command = user_input.strip().lower()
                if command in QUIT_INPUTS:
                    break
                if command in HINT_INPUTS:
                    if not view.has_more_hints:
                        console.print("[dim]No more hints available[/dim]")
                    runtime.post(HintRequested())
                    runtime.process_pending()
                    continue
                if not command:
                    console.print("[dim]Type an answer first ('h' = hint, 'q' = quit)[/dim]")
                    continue

                runtime.post(DraftAnswerChanged(user_input))
                runtime.post(SubmitRequested())
                with console.status("[dim]Checking answer...[/dim]", spinner="dots"):
                    await runtime.settle()
                continue

            if view.phase == SessionPhase.LOADING:
                console.print("[yellow]No challenges available right now.[/yellow]")

            user_input = Prompt.ask("[dim]Enter to continue[/dim]", default="", show_default=False)
            if user_input.strip().lower() in QUIT_INPUTS:
                break
            runtime.post(AdvanceRequested())
            with console.status("[dim]Loading...[/dim]", spinner="dots"):
                await runtime.settle()
    finally:
        await service.close()

    console.print("[dim]Session ended.[/dim]")


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
