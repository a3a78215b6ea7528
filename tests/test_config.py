"""
Tests for configuration loading: packages.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from devbootstrap.core.config.loader import ConfigError, find_catalog_file, load_catalog
from devbootstrap.core.services.package_manager.errors import ConfigurationError


@pytest.fixture
def valid_catalog_yml(tmp_path: Path) -> Path:
    """Create a valid packages.yml in a temp directory."""
    content = textwrap.dedent("""\
        bases:
          - name: VSCode
            title: Visual Studio Code
            type: dmg
            platforms: [darwin]
            version: "1.92.1"
          - name: Git
            type: pkg
            platforms: [darwin, linux]

        settings:
          command_bin_dir: /opt/bin
          strict_ide_types: true
    """)
    path = tmp_path / "packages.yml"
    path.write_text(content)
    return path


class TestFindCatalogFile:
    def test_finds_in_current_dir(self, valid_catalog_yml: Path):
        assert find_catalog_file(valid_catalog_yml.parent) == valid_catalog_yml.resolve()

    def test_walks_up(self, valid_catalog_yml: Path):
        nested = valid_catalog_yml.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_catalog_file(nested) == valid_catalog_yml.resolve()

    def test_not_found(self, tmp_path: Path):
        empty = tmp_path / "empty"
        empty.mkdir()
        found = find_catalog_file(empty)
        assert found is None or found.parent not in (empty, tmp_path)


class TestLoadCatalog:
    def test_load_valid(self, valid_catalog_yml: Path):
        catalog = load_catalog(valid_catalog_yml)

        assert [b.name for b in catalog.packages.bases] == ["VSCode", "Git"]
        vscode = catalog.packages.find_base("VSCode", "darwin")
        assert vscode is not None
        assert vscode.bundle_name == "Visual Studio Code"
        assert vscode.version == "1.92.1"
        assert catalog.settings.command_bin_dir == "/opt/bin"
        assert catalog.settings.strict_ide_types is True
        assert catalog.settings.applications_dir == "/Applications"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("")
        catalog = load_catalog(path)
        assert catalog.packages.bases == []
        assert catalog.settings.fail_on_nonzero_exit is False

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_catalog(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("bases: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_catalog(path)

    def test_non_mapping_root(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_catalog(path)

    def test_schema_error(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("bases:\n  - name: NoType\n")
        with pytest.raises(ConfigError, match="Invalid package catalog"):
            load_catalog(path)

    def test_config_error_is_configuration_error(self):
        assert issubclass(ConfigError, ConfigurationError)
