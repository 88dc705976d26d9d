"""
Unit tests for configuration loading and the plugin registry.
"""

import tempfile
from pathlib import Path

import pytest
import yaml

from recordgen.config.loader import (
    create_config_from_args,
    generate_default_config,
    load_config_from_yaml,
    merge_cli_overrides,
)
from recordgen.config.models import LanguageType, RecordGenConfig
from recordgen.exceptions import ConfigurationError
from recordgen.languages.base.plugin import LanguagePlugin
from recordgen.languages.java.plugin import JavaPlugin
from recordgen.languages.registry import LanguagePluginRegistry, get_plugin
from recordgen.languages.swift.plugin import SwiftPlugin


@pytest.fixture
def temp_dir():
    """Create a temporary directory for config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _write(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_default_config_round_trip(self, temp_dir):
        path = temp_dir / "nested" / "recordgen.yaml"
        generate_default_config(path)

        config = load_config_from_yaml(path)
        assert config == RecordGenConfig()

    def test_values(self, temp_dir):
        path = _write(
            temp_dir / "recordgen.yaml",
            yaml.dump({
                "language": "java",
                "synthesis": {"strict": True, "marker": "Withers", "parameter_name": "newValue"},
                "output": {"indent": "  "},
            }),
        )
        config = load_config_from_yaml(path)

        assert config.language == LanguageType.JAVA
        assert config.synthesis.strict
        assert config.synthesis.marker == "Withers"
        assert config.synthesis.parameter_name == "newValue"
        assert config.output.indent == "  "

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config_from_yaml(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="empty"):
            load_config_from_yaml(_write(temp_dir / "empty.yaml", ""))

    def test_invalid_yaml(self, temp_dir):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config_from_yaml(_write(temp_dir / "bad.yaml", "synthesis: [unclosed"))

    def test_validation_error(self, temp_dir):
        path = _write(temp_dir / "bad.yaml", "language: cobol\n")
        with pytest.raises(ConfigurationError, match="validation failed"):
            load_config_from_yaml(path)

    def test_invalid_parameter_name(self, temp_dir):
        path = _write(temp_dir / "bad.yaml", "synthesis:\n  parameter_name: 'new value'\n")
        with pytest.raises(ConfigurationError, match="parameter name"):
            load_config_from_yaml(path)


class TestConfigFromArgs:
    def test_defaults(self):
        config = create_config_from_args()
        assert config.language is None
        assert not config.synthesis.strict
        assert config.synthesis.marker == "Buildable"

    def test_marker_at_sign_is_stripped(self):
        assert create_config_from_args(marker="@Withers").synthesis.marker == "Withers"

    def test_unknown_language(self):
        with pytest.raises(ConfigurationError, match="Unsupported language"):
            create_config_from_args(language="cobol")

    def test_merge_overrides(self):
        merged = merge_cli_overrides(
            RecordGenConfig(), strict=True, language="SWIFT", output_path=Path("out.swift")
        )
        assert merged.synthesis.strict
        assert merged.language == LanguageType.SWIFT
        assert merged.output.output_path == Path("out.swift")

    def test_merge_without_overrides_keeps_config(self):
        config = RecordGenConfig()
        assert merge_cli_overrides(config) is config


class TestRegistry:
    def test_get_plugin(self):
        assert isinstance(LanguagePluginRegistry.get_plugin(LanguageType.SWIFT), SwiftPlugin)
        assert isinstance(LanguagePluginRegistry.get_plugin(LanguageType.JAVA), JavaPlugin)

    def test_plugin_for_path(self):
        assert isinstance(get_plugin(file_path=Path("Model.swift")), SwiftPlugin)
        assert isinstance(get_plugin(file_path=Path("Model.java")), JavaPlugin)

    def test_explicit_language_wins(self):
        assert isinstance(get_plugin(LanguageType.JAVA, Path("Model.swift")), JavaPlugin)

    def test_unknown_extension(self):
        with pytest.raises(ValueError, match="No language plugin"):
            get_plugin(file_path=Path("model.rs"))

    def test_register_rejects_non_plugins(self):
        with pytest.raises(TypeError):
            LanguagePluginRegistry.register_plugin(LanguageType.SWIFT, dict)

    def test_supported_languages(self):
        assert set(LanguagePluginRegistry.list_supported_languages()) == {"swift", "java"}
        assert issubclass(SwiftPlugin, LanguagePlugin)
