"""Tests for generator configuration loading."""
import pytest
from pydantic import ValidationError

from crud_generator.config import GeneratorConfig, NamingConfig, load_generator_config


class TestGeneratorConfig:
    """Test defaults and validation."""

    def test_defaults(self):
        config = GeneratorConfig()

        assert config.naming.create_prefix == "c_"
        assert config.naming.update_prefix == "u_"
        assert config.naming.delete_prefix == "d_"
        assert config.naming.get_by_id_prefix == "gid_"
        assert config.naming.package_name("ORDERS") == "ORDERS_package"
        assert config.validation.require_primary_key is True
        assert config.logging.level == "WARNING"

    def test_invalid_prefix(self):
        with pytest.raises(ValidationError):
            NamingConfig(create_prefix="c-")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            GeneratorConfig.model_validate({"logging": {"level": "TRACE"}})


class TestConfigLoading:
    """Test YAML and environment loading."""

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "crudgen.yaml"
        path.write_text(
            "naming:\n"
            "  package_suffix: _pkg\n"
            "validation:\n"
            "  require_primary_key: false\n",
            encoding="utf-8"
        )
        config = GeneratorConfig.from_yaml(path)

        assert config.naming.package_suffix == "_pkg"
        assert config.naming.create_prefix == "c_"
        assert config.validation.require_primary_key is False

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert GeneratorConfig.from_yaml(path) == GeneratorConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GeneratorConfig.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("naming:\n  update_prefix: 'u-'\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            GeneratorConfig.from_yaml(path)

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("naming:\n  delete_prefix: p_\n", encoding="utf-8")
        monkeypatch.setenv("CRUDGEN_CONFIG", str(path))

        assert load_generator_config().naming.delete_prefix == "p_"

    def test_default_path(self, tmp_path):
        """config/crudgen.yaml in the working directory is picked up."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "crudgen.yaml").write_text(
            "logging:\n  level: DEBUG\n", encoding="utf-8"
        )

        assert GeneratorConfig.from_env().logging.level == "DEBUG"

    def test_no_config_anywhere(self):
        assert load_generator_config() == GeneratorConfig()

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("naming:\n  package_suffix: _x\n", encoding="utf-8")
        monkeypatch.setenv("CRUDGEN_CONFIG", str(tmp_path / "ignored.yaml"))

        assert load_generator_config(explicit).naming.package_suffix == "_x"
