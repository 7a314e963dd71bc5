"""Tests for Config, policy parsing and TOML loading."""

import pytest

from csstrim.config import Action, Config, ConfigError, config_from_mapping, load_config


class TestAction:
    def test_parse_strings(self):
        assert Action.parse("remove") is Action.REMOVE
        assert Action.parse(" WARN ") is Action.WARN

    def test_parse_passthrough(self):
        assert Action.parse(Action.ERROR) is Action.ERROR

    def test_unknown(self):
        with pytest.raises(ConfigError, match="Unknown action"):
            Action.parse("delete")


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.never_matches == frozenset()
        assert config.on_override is Action.IGNORE
        assert config.max_reported == 20

    def test_coerces_inputs(self):
        config = Config(never_matches=[".x"], on_dead_selector="remove")
        assert config.never_matches == frozenset({".x"})
        assert config.on_dead_selector is Action.REMOVE

    def test_overlapping_assumptions_rejected(self):
        with pytest.raises(ConfigError, match=r"\.x"):
            Config(never_matches={".x"}, always_matches={".x", "body"})

    def test_negative_budget_rejected(self):
        with pytest.raises(ConfigError):
            Config(max_reported=-1)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            Config(max_reported="many")  # type: ignore[arg-type]

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Config().max_reported = 3  # type: ignore[misc]


class TestConfigFromMapping:
    def test_dashed_keys(self):
        config = config_from_mapping({"never-matches": [".x"], "on-override": "warn"})
        assert config.never_matches == frozenset({".x"})
        assert config.on_override is Action.WARN

    def test_keeps_base(self):
        base = Config(on_dead_selector=Action.REMOVE)
        config = config_from_mapping({"max_reported": 5}, base=base)
        assert config.on_dead_selector is Action.REMOVE
        assert config.max_reported == 5

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            config_from_mapping({"assume": []})

    def test_selectors_must_be_a_list(self):
        with pytest.raises(ConfigError):
            config_from_mapping({"always_matches": "body"})


class TestLoadConfig:
    def test_top_level(self, tmp_path):
        path = tmp_path / "csstrim.toml"
        path.write_text('never-matches = [".x"]\non-dead-selector = "remove"\n')
        config = load_config(path)
        assert config.never_matches == frozenset({".x"})
        assert config.on_dead_selector is Action.REMOVE

    def test_pyproject_table(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "site"\n\n'
            '[tool.csstrim]\nalways-matches = ["body", ".js"]\nmax-reported = 3\n'
        )
        config = load_config(path)
        assert config.always_matches == frozenset({"body", ".js"})
        assert config.max_reported == 3

    def test_base_fills_missing(self, tmp_path):
        path = tmp_path / "csstrim.toml"
        path.write_text('never-matches = [".x"]\n')
        config = load_config(path, base=Config(on_override=Action.REMOVE))
        assert config.on_override is Action.REMOVE

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("never-matches = [")
        with pytest.raises(ConfigError, match="Cannot read configuration"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.toml")
