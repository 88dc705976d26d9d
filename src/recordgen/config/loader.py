"""
Configuration loader for recordgen.

Handles loading configuration from YAML files and CLI arguments.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from recordgen.exceptions import ConfigurationError

from .models import LanguageType, OutputConfig, RecordGenConfig, SynthesisConfig

DEFAULT_CONFIG_NAME = "recordgen.yaml"


def load_config_from_yaml(config_path: Path) -> RecordGenConfig:
    """Load configuration from a YAML file."""
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if raw_config is None:
        raise ConfigurationError("Configuration file is empty")

    if not isinstance(raw_config, dict):
        raise ConfigurationError("Configuration file must contain a mapping at the top level")

    try:
        config = RecordGenConfig(**raw_config)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed:\n{e}")

    if not config.synthesis.parameter_name.isidentifier():
        raise ConfigurationError(
            f"Invalid wither parameter name '{config.synthesis.parameter_name}'"
        )

    return config


def create_config_from_args(
    language: str | None = None,
    strict: bool = False,
    parameter_name: str = "value",
    marker: str = "Buildable",
    indent: str | None = None,
    output_path: Path | None = None,
    **kwargs: Any,
) -> RecordGenConfig:
    """Create configuration from CLI arguments."""
    source_language = None
    if language:
        try:
            source_language = LanguageType(language.lower())
        except ValueError:
            valid = [lang.value for lang in LanguageType]
            raise ConfigurationError(f"Unsupported language '{language}'. Valid languages: {valid}")

    if not parameter_name.isidentifier():
        raise ConfigurationError(f"Invalid wither parameter name '{parameter_name}'")

    synthesis_config = SynthesisConfig(
        strict=strict,
        parameter_name=parameter_name,
        marker=marker.lstrip("@"),
    )
    output_config = OutputConfig(indent=indent, output_path=output_path)

    return RecordGenConfig(
        language=source_language,
        synthesis=synthesis_config,
        output=output_config,
    )


def merge_cli_overrides(
    config: RecordGenConfig,
    strict: bool = False,
    language: str | None = None,
    output_path: Path | None = None,
) -> RecordGenConfig:
    """Apply CLI flags on top of a configuration loaded from YAML."""
    updates: dict[str, Any] = {}
    if strict:
        updates["synthesis"] = config.synthesis.model_copy(update={"strict": True})
    if language:
        updates["language"] = create_config_from_args(language=language).language
    if output_path is not None:
        updates["output"] = config.output.model_copy(update={"output_path": output_path})
    return config.model_copy(update=updates) if updates else config


def generate_default_config(output_path: Path) -> None:
    """Generate a default configuration file."""
    default_config = {
        "language": None,
        "synthesis": {
            "strict": False,
            "parameter_name": "value",
            "marker": "Buildable",
        },
        "output": {
            "indent": None,
        },
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)
