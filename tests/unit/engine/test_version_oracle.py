import json

import pytest

from fxmigrate.common.exceptions import ConfigReadError
from fxmigrate.engine import ProjectVersion, VersionOracle, VersionStatus


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


@pytest.mark.parametrize(
    "legacy, expected",
    [
        ({"version": "2.1.0"}, ProjectVersion(VersionStatus.UPGRADABLE, "2.1.0")),
        ({}, ProjectVersion(VersionStatus.UNVERSIONED)),
        ({"version": "1.2.0"}, ProjectVersion(VersionStatus.UNSUPPORTED, "1.2.0")),
        ({"version": 2}, ProjectVersion(VersionStatus.UNSUPPORTED, "2")),
    ],
)
def test_classify_legacy_layout(tmp_path, legacy, expected):
    write_json(tmp_path / ".fx" / "configs" / "projectSettings.json", legacy)

    assert VersionOracle().classify(tmp_path) == expected


def test_new_layout_wins_over_legacy(tmp_path):
    write_json(tmp_path / ".fx" / "configs" / "projectSettings.json", {"version": "2.1.0"})
    write_json(tmp_path / "teamsfx" / "settings.json", {"version": "3.0.0"})

    assert VersionOracle().classify(tmp_path) == ProjectVersion(
        VersionStatus.CURRENT, "3.0.0"
    )


def test_unknown_new_layout_version_is_unsupported(tmp_path):
    write_json(tmp_path / "teamsfx" / "settings.json", {"trackingId": "x"})

    assert VersionOracle().classify(tmp_path) == ProjectVersion(VersionStatus.UNSUPPORTED)


def test_missing_settings_raise(tmp_path):
    with pytest.raises(ConfigReadError, match="no project settings"):
        VersionOracle().classify(tmp_path)


def test_malformed_settings_raise(tmp_path):
    path = tmp_path / ".fx" / "configs" / "projectSettings.json"
    path.parent.mkdir(parents=True)
    path.write_text("{{")

    with pytest.raises(ConfigReadError):
        VersionOracle().classify(tmp_path)


@pytest.mark.parametrize(
    "version, migratable",
    [
        (ProjectVersion(VersionStatus.UPGRADABLE, "2.1.0"), True),
        (ProjectVersion(VersionStatus.UPGRADABLE, "2.0.0"), False),
        (ProjectVersion(VersionStatus.UNVERSIONED), False),
        (ProjectVersion(VersionStatus.CURRENT, "3.0.0"), False),
        (ProjectVersion(VersionStatus.UNSUPPORTED, "2.1.0"), False),
    ],
)
def test_is_migratable(version, migratable):
    assert VersionOracle.is_migratable(version) is migratable
