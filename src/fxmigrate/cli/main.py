import typer

from fxmigrate.common import bus, fxmigrate_nexus as nexus
from fxmigrate.needle import L
from .rendering import CliRenderer

from .commands.status import status_command
from .commands.upgrade import upgrade_command

app = typer.Typer(
    name="fxmigrate",
    help=nexus.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=nexus.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root. It decides *which* renderer to use.
    bus.set_renderer(CliRenderer(verbose=verbose))


app.command(name="upgrade", help=nexus.get(L.cli.command.upgrade.help))(
    upgrade_command
)
app.command(name="status", help=nexus.get(L.cli.command.status.help))(status_command)


if __name__ == "__main__":
    app()
