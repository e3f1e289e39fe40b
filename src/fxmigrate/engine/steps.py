import json
import uuid
from typing import Callable, List

from fxmigrate.common import bus
from fxmigrate.config import read_json_object
from fxmigrate.needle import L
from fxmigrate.templates import (
    build_local_pipeline_context,
    build_pipeline_context,
    select_local_template,
    select_template,
)
from .context import MigrationContext
from .version import CURRENT_VERSION

MigrationStep = Callable[[MigrationContext], None]


def pre_migration(context: MigrationContext) -> None:
    context.workspace.backup(context.config.legacy_folder)


def generate_settings_json(context: MigrationContext) -> None:
    old_settings = context.old_settings()
    # The one place allowed to mint a new identity for the project.
    tracking_id = old_settings.project_id or str(uuid.uuid4())

    content = {"version": CURRENT_VERSION, "trackingId": tracking_id}
    context.workspace.ensure_dir(context.config.settings_folder)
    context.workspace.write_file(
        context.config.settings_file_path, json.dumps(content, indent=4)
    )
    context.tracking_id = tracking_id


def generate_app_yml(context: MigrationContext) -> None:
    old_settings = context.old_settings()
    template_id = select_template(
        old_settings.host_type, old_settings.programming_language
    )
    template_context = build_pipeline_context(
        old_settings, context.infra_content(), context.project_path
    )
    content = context.renderer.render(template_id, template_context)
    context.workspace.write_file(context.config.app_yml_path, content)


def generate_app_local_yml(context: MigrationContext) -> None:
    config = context.config
    local_settings_path = context.project_path / config.legacy_local_settings_path
    if not config.generate_local_yml or not local_settings_path.is_file():
        bus.debug(L.migration.local.skipped, path=config.app_local_yml_path)
        return

    old_settings = context.old_settings()
    template_id = select_local_template(
        old_settings.host_type, old_settings.programming_language
    )
    if template_id is None:
        bus.debug(
            L.migration.local.unsupported,
            host=old_settings.host_type,
            language=old_settings.programming_language,
        )
        return

    template_context = build_local_pipeline_context(
        old_settings, read_json_object(local_settings_path), context.project_path
    )
    content = context.renderer.render(template_id, template_context)
    context.workspace.write_file(config.app_local_yml_path, content)


DEFAULT_STEPS: List[MigrationStep] = [
    pre_migration,
    generate_settings_json,
    generate_app_yml,
    generate_app_local_yml,
]
