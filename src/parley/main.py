import typer

from parley import __version__
from parley.cli import listing, talk_to
from parley.cli.config import CLIConfig
from parley.logging_config import logger, setup_logging

app = typer.Typer()


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: pretty output with tables and colors (also via PARLEY_HUMAN_MODE env var)"
    ),
):
    """
    Parley: carry to-talk items into the note for your next conversation.

    Machine mode is the default (plain text). Use --human/-H for pretty output.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    elif CLIConfig.is_machine_mode():
        # Plain output only, keep log lines off the console
        setup_logging(suppress_console=True, force=True)


app.command(name="talk-to")(talk_to.talk_to_cmd)
app.command(name="people")(listing.people_cmd)
app.command(name="items")(listing.items_cmd)


@app.command()
def version():
    """
    Prints the current version of Parley.
    """
    logger.debug(f"Parley v{__version__}")
    typer.echo(f"Parley v{__version__}")


if __name__ == "__main__":
    app()
