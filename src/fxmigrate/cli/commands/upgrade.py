from pathlib import Path
from typing import Optional

import typer

from fxmigrate.common import bus, fxmigrate_nexus as nexus
from fxmigrate.common.exceptions import MigrationError
from fxmigrate.config import load_config_from_path
from fxmigrate.engine import MigrationCoordinator
from fxmigrate.needle import L


def upgrade_command(
    project_path: Optional[Path] = typer.Argument(
        None,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help=nexus.get(L.cli.argument.project_path.help),
    ),
    infra: Optional[Path] = typer.Option(
        None,
        "--infra",
        exists=True,
        dir_okay=False,
        help=nexus.get(L.cli.option.infra.help),
    ),
    keep_backup: Optional[bool] = typer.Option(
        None,
        "--keep-backup/--no-keep-backup",
        help=nexus.get(L.cli.option.keep_backup.help),
    ),
):
    root_path = (project_path or Path.cwd()).resolve()

    try:
        config = load_config_from_path(root_path)
        if keep_backup is not None:
            config.keep_backup = keep_backup

        coordinator = MigrationCoordinator(config=config, infra_path=infra)
        coordinator.migrate(root_path)
    except MigrationError as e:
        bus.error(L.error.generic, error=str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        bus.error(L.error.generic, error=f"An unexpected error occurred: {e}")
        raise typer.Exit(code=1)
