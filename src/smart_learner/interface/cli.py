"""smart-learner CLI: deck management, card editing, search and study sessions."""

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import click
import typer

from smart_learner.application.config import (
    config_file_candidates,
    resolve_config,
    save_folder_path,
)
from smart_learner.application.factory import get_study_session
from smart_learner.application.study_session import StudySession
from smart_learner.consts import VERSION
from smart_learner.domain.constants import SEARCH_TRUNCATE_LEN
from smart_learner.domain.errors import SmartLearnerError
from smart_learner.domain.models import Grade, Side

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="smart-learner: spaced-repetition flashcards in your terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage smart-learner configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

GRADE_KEYS = {"w": Grade.WRONG, "d": Grade.DIFFICULT, "e": Grade.EASY}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def user_errors() -> Iterator[None]:
    """Render domain errors as a message and exit code 1 instead of a traceback."""
    try:
        yield
    except SmartLearnerError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def _open_session(ctx: typer.Context, deck: str | None = None) -> StudySession:
    obj = ctx.obj or {}
    config = resolve_config(
        {"folder_path": obj.get("folder_path"), "verbose": obj.get("verbose_bonus")}
    )
    session = get_study_session(config)
    if deck is not None:
        session.select_deck(deck)
    return session


def _truncate(text: str) -> str:
    first_line = text.splitlines()[0] if text else ""
    if len(first_line) > SEARCH_TRUNCATE_LEN:
        return first_line[: SEARCH_TRUNCATE_LEN - 3] + "..."
    return first_line


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
    folder: Annotated[
        Path | None,
        typer.Option("--folder", help="Deck folder. Defaults to 'folder_path' in config."),
    ] = None,
):
    """Global settings for smart-learner."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose
    ctx.obj["folder_path"] = folder

    if verbose >= 3:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbose == 2:
        logging.getLogger().setLevel(logging.INFO)


# ---------------------------------------------------------------------------
# Decks
# ---------------------------------------------------------------------------


@app.command("decks")
def list_decks(ctx: typer.Context):
    """List decks with their card and due counts."""
    with user_errors():
        session = _open_session(ctx)
        if not session.decks:
            typer.secho(
                "No decks yet. Create one with 'smart-learner new-deck NAME'.", fg="yellow"
            )
            return

        today = session.clock.today()
        for stored in session.decks:
            deck = stored.deck
            typer.echo(f"{deck.name}\t{len(deck)} cards\t{deck.due_count(today)} due")


@app.command("new-deck")
def new_deck(ctx: typer.Context, name: Annotated[str, typer.Argument(help="Deck name.")]):
    """Create an empty deck."""
    with user_errors():
        session = _open_session(ctx)
        stored = session.new_deck(name)
        typer.secho(f"Created deck '{stored.deck.name}' at {stored.path}", fg="green")


@app.command("remove-deck")
def remove_deck(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Deck name.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Delete a deck and its file."""
    with user_errors():
        session = _open_session(ctx, name)
        if not force and not typer.confirm(f"Delete deck '{name}'?"):
            raise typer.Abort()
        session.remove_deck(name)
        typer.secho(f"Deleted deck '{name}'", fg="green")


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


@app.command("add")
def add_card(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    front: Annotated[str, typer.Option(help="Front (question) text.", prompt=True)],
    back: Annotated[str, typer.Option(help="Back (answer) text.", prompt=True)],
):
    """Add a card to a deck. It is due immediately."""
    with user_errors():
        session = _open_session(ctx, deck)
        position = session.create_card()
        session.edit_card(front, back)
        typer.echo(f"Added card at position {position}")


@app.command("edit")
def edit_card(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    position: Annotated[int, typer.Argument(help="Card position, as shown by 'search'.")],
    front: Annotated[str | None, typer.Option(help="New front text.")] = None,
    back: Annotated[str | None, typer.Option(help="New back text.")] = None,
):
    """Change the text of a card. Scheduling is left untouched."""
    with user_errors():
        session = _open_session(ctx, deck)
        card = session.select_card(position)
        session.edit_card(
            front if front is not None else card.front.text,
            back if back is not None else card.back.text,
        )
        typer.echo(f"Updated card {position}")


@app.command("remove")
def remove_card(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    position: Annotated[int, typer.Argument(help="Card position, as shown by 'search'.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Remove a card. Positions shown by earlier searches are no longer valid afterwards."""
    with user_errors():
        session = _open_session(ctx, deck)
        card = session.select_card(position)
        if not force and not typer.confirm(f"Delete card '{_truncate(card.front.text)}'?"):
            raise typer.Abort()
        session.delete_card()
        typer.echo(f"Removed card {position}")


@app.command("search")
def search(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    query: Annotated[str, typer.Argument(help="Text to look for (case-insensitive).")],
    back: Annotated[bool, typer.Option("--back", help="Search the back side.")] = False,
):
    """Find cards whose front (or back) contains QUERY."""
    with user_errors():
        session = _open_session(ctx, deck)
        hits = session.search(query, back=back)
        if not hits:
            typer.secho("No matches.", fg="yellow")
            return
        for hit in hits:
            typer.echo(f"{hit.position}: {_truncate(hit.text)}")


@app.command("audio")
def audio(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    position: Annotated[int, typer.Argument(help="Card position.")],
    side: Annotated[Side, typer.Option(help="Card side.")] = Side.FRONT,
    file: Annotated[
        Path | None, typer.Option("--file", help="Audio file to import and attach.")
    ] = None,
    clear: Annotated[bool, typer.Option("--clear", help="Detach the side's audio.")] = False,
):
    """Attach or detach audio on one side of a card."""
    if (file is None) == (not clear):
        typer.secho("Pass exactly one of --file or --clear.", fg="red", err=True)
        raise typer.Exit(2)

    with user_errors():
        session = _open_session(ctx, deck)
        session.select_card(position)
        if clear:
            session.clear_audio(side)
            typer.echo(f"Cleared {side.value} audio of card {position}")
        else:
            handle = session.set_audio(side, file)
            typer.echo(f"Attached {handle} to the {side.value} of card {position}")


# ---------------------------------------------------------------------------
# Study
# ---------------------------------------------------------------------------


@app.command("study")
def study(
    ctx: typer.Context,
    deck: Annotated[str, typer.Argument(help="Deck name.")],
    no_audio: Annotated[bool, typer.Option("--no-audio", help="Do not play audio.")] = False,
):
    """[bold green]Study[/bold green] the cards that are due today."""
    with user_errors():
        session = _open_session(ctx, deck)
        reviewed = 0

        while session.next_card() is not None:
            typer.secho(f"\n{session.question()}", bold=True)
            if not no_audio:
                session.play_audio(Side.FRONT)
            typer.prompt("Press Enter to show the answer", default="", show_default=False)

            typer.echo(session.answer())
            if not no_audio:
                session.play_audio(Side.BACK)

            key = typer.prompt(
                "[w]rong / [d]ifficult / [e]asy / [q]uit",
                type=click.Choice(["w", "d", "e", "q"]),
                show_choices=False,
            )
            if key == "q":
                break

            card = session.review(GRADE_KEYS[key])
            reviewed += 1
            logger.debug(f"Next review of card {session.current_card} on {card.due_date}")

        if reviewed == 0 and session.current_card is None:
            typer.secho("No cards to review.", fg="yellow")
        else:
            typer.secho(f"Reviewed {reviewed} cards.", fg="green")


@app.command("version")
def version():
    """Print the installed version."""
    typer.echo(f"smart-learner {VERSION}")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Print the resolved configuration as JSON."""
    obj = ctx.obj or {}
    config = resolve_config({"folder_path": obj.get("folder_path")})
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


@config_app.command("path")
def config_path():
    """Show where the config file is read from."""
    for candidate in config_file_candidates():
        status = "found" if candidate.exists() else "missing"
        typer.echo(f"{candidate} ({status})")


@config_app.command("set-folder")
def config_set_folder(
    folder: Annotated[Path, typer.Argument(help="Folder that holds the deck files.")],
):
    """Remember the deck folder in the config file."""
    with user_errors():
        target = save_folder_path(folder)
    typer.secho(f"Deck folder set to {folder.expanduser().resolve()} in {target}", fg="green")


def main():
    app()


if __name__ == "__main__":
    main()
