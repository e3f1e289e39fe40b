from pathlib import Path
from typing import Optional

import typer

from fxmigrate.common import bus, fxmigrate_nexus as nexus
from fxmigrate.common.exceptions import MigrationError
from fxmigrate.config import load_config_from_path
from fxmigrate.engine import VersionOracle
from fxmigrate.needle import L


def status_command(
    project_path: Optional[Path] = typer.Argument(
        None,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help=nexus.get(L.cli.argument.project_path.help),
    ),
):
    root_path = (project_path or Path.cwd()).resolve()

    try:
        version = VersionOracle(load_config_from_path(root_path)).classify(root_path)
    except MigrationError as e:
        bus.error(L.error.generic, error=str(e))
        raise typer.Exit(code=1)

    bus.info(
        L.migration.status.report,
        path=root_path,
        status=version.status.value,
        version=version.version or "-",
    )
    if VersionOracle.is_migratable(version):
        bus.warning(L.migration.status.upgrade_available)
