from typer.testing import CliRunner

from fxmigrate.cli.main import app
from fxmigrate.needle import L
from fxmigrate.test_utils import snapshot_tree

runner = CliRunner()


def test_upgrade_command_success(project_factory, spy_bus):
    root = project_factory.build()

    result = runner.invoke(app, ["upgrade", str(root)])

    assert result.exit_code == 0, result.output
    assert "Project upgraded. 3 path(s)" in result.output
    assert "teamsfx/app.yml" in result.output
    assert (root / "teamsfx" / "app.yml").is_file()
    spy_bus.assert_id_called(L.migration.run.success, level="success")


def test_upgrade_command_no_keep_backup(project_factory):
    root = project_factory.build()

    result = runner.invoke(app, ["upgrade", str(root), "--no-keep-backup"])

    assert result.exit_code == 0, result.output
    assert not (root / ".backup").exists()


def test_upgrade_command_with_infra_option(tmp_path, project_factory):
    root = project_factory.with_plugins("fx-resource-frontend-hosting").build()
    infra = tmp_path / "provision.bicep"
    infra.write_text('frontendHostingStorageResourceId = "/from/option"')

    result = runner.invoke(app, ["upgrade", str(root), "--infra", str(infra)])

    assert result.exit_code == 0, result.output
    assert "/from/option" in (root / "teamsfx" / "app.yml").read_text()


def test_upgrade_command_failure_exits_non_zero(project_factory, spy_bus):
    root = project_factory.with_host_type("Office").build()
    before = snapshot_tree(root)

    result = runner.invoke(app, ["upgrade", str(root)])

    assert result.exit_code == 1
    assert "Cannot automatically upgrade" in result.output
    assert snapshot_tree(root) == before
    spy_bus.assert_id_called(L.error.generic, level="error")


def test_upgrade_command_on_current_project(project_factory):
    root = project_factory.build()
    (root / "teamsfx").mkdir()
    (root / "teamsfx" / "settings.json").write_text('{"version": "3.0.0"}')

    result = runner.invoke(app, ["upgrade", str(root)])

    assert result.exit_code == 0, result.output
    assert "No upgrade needed" in result.output


def test_status_command_reports_upgradable(project_factory, spy_bus):
    root = project_factory.build()

    result = runner.invoke(app, ["status", str(root)])

    assert result.exit_code == 0, result.output
    assert "upgradable (version 2.1.0)" in result.output
    spy_bus.assert_id_called(L.migration.status.upgrade_available, level="warning")
    assert not (root / "teamsfx").exists()


def test_status_command_without_settings(tmp_path, spy_bus):
    result = runner.invoke(app, ["status", str(tmp_path)])

    assert result.exit_code == 1
    spy_bus.assert_id_called(L.error.generic, level="error")


def test_verbose_flag_shows_step_tracing(project_factory):
    root = project_factory.build()

    quiet = runner.invoke(app, ["upgrade", str(root), "--no-keep-backup"])
    assert "Running step" not in quiet.output

    other = project_factory.root_path.parent / "other"
    project_factory.root_path = other
    project_factory.build()
    verbose = runner.invoke(app, ["--verbose", "upgrade", str(other)])

    assert verbose.exit_code == 0, verbose.output
    assert "Running step 'generate_app_yml'" in verbose.output


def test_verbose_help_describes_terminal_output():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "step-by-step" in result.output
    assert "logging" not in result.output
