"""Tests for configuration file support."""

import sys
import warnings

import pytest

from netlist_rebuild.config import (
    Config,
    ConfigError,
    DefaultsConfig,
    LayoutConfig,
    LibraryConfig,
    WiresConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)
from netlist_rebuild.exceptions import ConfigurationError

NO_USER_CONFIG = "no-exist.toml"


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Empty project root with no user config."""
    (tmp_path / ".git").mkdir()
    monkeypatch.setattr("netlist_rebuild.config.USER_CONFIG_PATH", tmp_path / NO_USER_CONFIG)
    return tmp_path


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_defaults_config_defaults(self):
        config = DefaultsConfig()
        assert config.verbose is False
        assert config.quiet is False
        assert config.assume_yes is False

    def test_layout_config_defaults(self):
        """LayoutConfig matches the standard grid."""
        config = LayoutConfig()
        assert (config.origin_x, config.origin_y) == (20, 20)
        assert config.grid_size == 100
        assert config.max_per_row == 15

    def test_wires_config_defaults(self):
        config = WiresConfig()
        assert config.strategy == "immediate"
        assert config.stub_length == 30
        assert config.drop_single_pin_nets is False

    def test_library_config_defaults(self):
        config = LibraryConfig()
        assert config.search_page == 1
        assert config.cache_lookups is False
        assert config.fuzzy_cutoff == 0.6

    def test_config_defaults(self):
        """Config has correct nested defaults."""
        config = Config()
        assert isinstance(config.defaults, DefaultsConfig)
        assert isinstance(config.layout, LayoutConfig)
        assert isinstance(config.wires, WiresConfig)
        assert isinstance(config.library, LibraryConfig)


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_project_config_in_current_dir(self, tmp_path):
        config_file = tmp_path / ".netlist-rebuild.toml"
        config_file.write_text("[wires]\nstrategy = 'grouped'\n")
        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_alternate_name(self, tmp_path):
        config_file = tmp_path / "netlist-rebuild.toml"
        config_file.write_text("[wires]\n")
        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_prefers_hidden(self, tmp_path):
        """Hidden .netlist-rebuild.toml is preferred over netlist-rebuild.toml."""
        (tmp_path / "netlist-rebuild.toml").write_text("[wires]\n")
        hidden = tmp_path / ".netlist-rebuild.toml"
        hidden.write_text("[wires]\n")
        assert _find_project_config(tmp_path) == hidden

    def test_find_project_config_walks_up(self, tmp_path):
        parent_config = tmp_path / ".netlist-rebuild.toml"
        parent_config.write_text("[layout]\n")

        subdir = tmp_path / "boards" / "rev-b"
        subdir.mkdir(parents=True)

        assert _find_project_config(subdir) == parent_config

    def test_find_project_config_stops_at_git(self, tmp_path):
        """Config above the .git directory is not picked up."""
        parent = tmp_path / "parent"
        project = parent / "project"
        (project / ".git").mkdir(parents=True)
        (parent / ".netlist-rebuild.toml").write_text("[layout]\n")

        assert _find_project_config(project) is None

    def test_find_project_config_not_found(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert _find_project_config(tmp_path) is None


class TestLoadToml:
    """Test TOML file loading."""

    def test_load_valid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            """
[layout]
grid_size = 50

[wires]
strategy = "grouped"
"""
        )

        result = _load_toml_file(config_file)
        assert result["layout"]["grid_size"] == 50
        assert result["wires"]["strategy"] == "grouped"

    def test_load_invalid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("invalid [ toml syntax")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _load_toml_file(config_file)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            _load_toml_file(tmp_path / "nonexistent.toml")


class TestConfigLoad:
    """Test Config.load() method."""

    def test_load_defaults_only(self, project):
        config = Config.load(project)
        assert config.wires.strategy == "immediate"
        assert config.layout.max_per_row == 15

    def test_load_project_config(self, project):
        (project / ".netlist-rebuild.toml").write_text(
            """
[layout]
grid_size = 50
max_per_row = 4

[wires]
strategy = "grouped"
drop_single_pin_nets = true
"""
        )

        config = Config.load(project)
        assert config.layout.grid_size == 50
        assert config.layout.max_per_row == 4
        assert config.wires.strategy == "grouped"
        assert config.wires.drop_single_pin_nets is True

    def test_load_user_config(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[defaults]\nverbose = true\n\n[library]\ncache_lookups = true\n")
        monkeypatch.setattr("netlist_rebuild.config.USER_CONFIG_PATH", user_config)

        config = Config.load(tmp_path)
        assert config.defaults.verbose is True
        assert config.library.cache_lookups is True

    def test_project_overrides_user(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[wires]\nstrategy = 'grouped'\nstub_length = 40\n")
        (tmp_path / ".netlist-rebuild.toml").write_text("[wires]\nstrategy = 'immediate'\n")
        monkeypatch.setattr("netlist_rebuild.config.USER_CONFIG_PATH", user_config)

        config = Config.load(tmp_path)
        # Project overrides user
        assert config.wires.strategy == "immediate"
        # User value preserved when not in project
        assert config.wires.stub_length == 40

    def test_get_source_tracking(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[wires]\nstub_length = 20\n")
        (tmp_path / ".netlist-rebuild.toml").write_text("[layout]\ngrid_size = 10\n")
        monkeypatch.setattr("netlist_rebuild.config.USER_CONFIG_PATH", user_config)

        config = Config.load(tmp_path)

        assert "user-config.toml" in config.get_source("wires.stub_length")
        assert ".netlist-rebuild.toml" in config.get_source("layout.grid_size")
        assert config.get_source("library.search_page") == "default"

    def test_invalid_value_rejected(self, project):
        (project / ".netlist-rebuild.toml").write_text("[wires]\nstrategy = 'spiral'\n")

        with pytest.raises(ConfigurationError, match="spiral"):
            Config.load(project)


class TestConfigTypes:
    """Test type checking of config file values."""

    @pytest.mark.parametrize(
        "toml",
        [
            '[layout]\ngrid_size = "big"\n',
            "[layout]\nmax_per_row = 2.5\n",
            "[wires]\ndrop_single_pin_nets = 1\n",
            "[wires]\nstrategy = 3\n",
            "[library]\nsearch_page = true\n",
        ],
    )
    def test_wrong_type_rejected(self, project, toml):
        (project / ".netlist-rebuild.toml").write_text(toml)

        with pytest.raises(ConfigError, match="must be"):
            Config.load(project)

    def test_error_names_key_and_source(self, project):
        (project / ".netlist-rebuild.toml").write_text('[layout]\ngrid_size = "big"\n')

        with pytest.raises(ConfigError) as exc_info:
            Config.load(project)
        assert "layout.grid_size" in str(exc_info.value)
        assert ".netlist-rebuild.toml" in str(exc_info.value)

    def test_int_accepted_for_float_field(self, project):
        (project / ".netlist-rebuild.toml").write_text("[wires]\nstub_length = 12\n[library]\nfuzzy_cutoff = 1\n")
        config = Config.load(project)
        assert config.wires.stub_length == 12
        assert config.library.fuzzy_cutoff == 1

    def test_section_must_be_table(self, project):
        (project / ".netlist-rebuild.toml").write_text("layout = 5\n")

        with pytest.raises(ConfigError, match="must be a table"):
            Config.load(project)


class TestConfigValues:
    """Test get_value() and validate()."""

    def test_get_value(self):
        config = Config()
        assert config.get_value("wires.strategy") == "immediate"
        assert config.get_value("layout.grid_size") == 100

    @pytest.mark.parametrize("key", ["wires", "wires.color", "routing.strategy", ""])
    def test_get_value_unknown_key(self, key):
        with pytest.raises(ConfigError, match="Unknown config key"):
            Config().get_value(key)

    def test_validate_defaults(self):
        Config().validate()

    @pytest.mark.parametrize(
        "section,key,value",
        [
            ("layout", "max_per_row", 0),
            ("layout", "grid_size", 0),
            ("wires", "stub_length", -1),
            ("wires", "strategy", "routed"),
            ("library", "search_page", 0),
        ],
    )
    def test_validate_rejects(self, section, key, value):
        config = Config()
        setattr(getattr(config, section), key, value)
        with pytest.raises(ConfigurationError):
            config.validate()


class TestConfigWarnings:
    """Test warnings for unknown config keys."""

    def test_warn_unknown_section(self, project):
        (project / ".netlist-rebuild.toml").write_text('[unknown_section]\nkey = "value"\n')

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(project)

            assert len(w) == 1
            assert "unknown_section" in str(w[0].message)

    def test_warn_unknown_key_in_section(self, project):
        (project / ".netlist-rebuild.toml").write_text("[wires]\nthickness = 2\n")

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(project)

            assert len(w) == 1
            assert "wires.thickness" in str(w[0].message)


class TestGenerateTemplate:
    """Test template generation."""

    def test_generate_template_valid_toml(self):
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        # Everything is commented out, so this parses to an empty dict
        result = tomllib.loads(generate_template())
        assert isinstance(result, dict)

    def test_generate_template_has_sections(self):
        template = generate_template()
        for section in ("[defaults]", "[layout]", "[wires]", "[library]"):
            assert section in template

    def test_generate_template_documents_options(self):
        template = generate_template()
        assert "max_per_row" in template
        assert "stub_length" in template
        assert "drop_single_pin_nets" in template
        assert "cache_lookups" in template


class TestGetConfigPaths:
    """Test get_config_paths function."""

    def test_returns_none_for_missing_files(self, project, monkeypatch):
        monkeypatch.chdir(project)

        paths = get_config_paths()
        assert paths["user"] is None
        assert paths["project"] is None

    def test_returns_paths_for_existing_files(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        project_config = tmp_path / ".netlist-rebuild.toml"
        project_config.write_text("[defaults]\n")
        user_config = tmp_path / "user.toml"
        user_config.write_text("[defaults]\n")

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("netlist_rebuild.config.USER_CONFIG_PATH", user_config)

        paths = get_config_paths()
        assert paths["user"] == user_config
        assert paths["project"] == project_config
