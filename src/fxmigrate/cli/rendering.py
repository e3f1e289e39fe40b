import typer

from fxmigrate.common.messaging.protocols import Renderer

LEVEL_STYLES = {
    "debug": {"fg": typer.colors.BRIGHT_BLACK},
    "success": {"fg": typer.colors.GREEN, "bold": True},
    "warning": {"fg": typer.colors.YELLOW},
    "error": {"fg": typer.colors.RED, "bold": True},
}


class CliRenderer(Renderer):
    """Writes bus messages to the terminal, one line per message."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str) -> None:
        if level == "debug" and not self.verbose:
            return
        typer.secho(message, **LEVEL_STYLES.get(level, {}))
