"""
Generator configuration.

Defaults target the kord-extensions command framework. A YAML file can
override any field:

    annotation: com.example.annotations.Converter
    jobs: 4
    known_types:
      - com.example.types.Duration
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Tuple

import yaml


ANNOTATION_FQN = "com.kotlindiscord.kord.extensions.modules.annotations.converters.Converter"
CONVERTER_TYPE_FQN = "com.kotlindiscord.kord.extensions.modules.annotations.converters.ConverterType"
CONVERTERS_PACKAGE = "com.kotlindiscord.kord.extensions.commands.converters"

DEFAULT_OPT_INS = (
    "KordPreview",
    "ConverterToDefaulting",
    "ConverterToMulti",
    "ConverterToOptional",
)

DEFAULT_FRAMEWORK_IMPORTS = (
    f"{CONVERTERS_PACKAGE}.*",
    "com.kotlindiscord.kord.extensions.commands.parser.Arguments",
    "dev.kord.common.annotation.KordPreview",
)

# Classpath index: types the environment may resolve without seeing a source
DEFAULT_KNOWN_TYPES = (
    ANNOTATION_FQN,
    CONVERTER_TYPE_FQN,
    f"{CONVERTERS_PACKAGE}.Converter",
    f"{CONVERTERS_PACKAGE}.SingleConverter",
    f"{CONVERTERS_PACKAGE}.ChoiceConverter",
    f"{CONVERTERS_PACKAGE}.CoalescingConverter",
    f"{CONVERTERS_PACKAGE}.DefaultingConverter",
    f"{CONVERTERS_PACKAGE}.OptionalConverter",
    f"{CONVERTERS_PACKAGE}.MultiConverter",
    f"{CONVERTERS_PACKAGE}.Validator",
    "com.kotlindiscord.kord.extensions.commands.parser.Arguments",
    "dev.kord.common.annotation.KordPreview",
    "dev.kord.common.Color",
    "dev.kord.common.entity.Snowflake",
    "dev.kord.core.entity.Guild",
    "dev.kord.core.entity.GuildEmoji",
    "dev.kord.core.entity.Member",
    "dev.kord.core.entity.Message",
    "dev.kord.core.entity.Role",
    "dev.kord.core.entity.User",
    "dev.kord.core.entity.channel.Channel",
    "kotlinx.datetime.DateTimePeriod",
    "java.util.Locale",
)


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings shared by the environment, the generator and the CLI."""
    annotation: str = ANNOTATION_FQN
    annotation_parameters: Tuple[str, ...] = ("name", "types", "imports")
    opt_ins: Tuple[str, ...] = DEFAULT_OPT_INS
    framework_imports: Tuple[str, ...] = DEFAULT_FRAMEWORK_IMPORTS
    known_types: Tuple[str, ...] = DEFAULT_KNOWN_TYPES
    file_extension: str = ".kt"
    jobs: int = 1
    extra_known_types: Tuple[str, ...] = field(default=())

    @property
    def classpath(self) -> Tuple[str, ...]:
        return self.known_types + self.extra_known_types

    @property
    def annotation_signatures(self) -> dict:
        return {self.annotation: self.annotation_parameters}


def _coerce(key: str, value, default):
    """Check a configured value against the type of its default."""
    if isinstance(default, tuple):
        # A single entry may be written as a scalar
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) and item for item in value):
            raise ValueError(f"{key} must be a list of non-empty strings")
        return tuple(value)

    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        return value

    if not isinstance(value, str) or not value:
        raise ValueError(f"{key} must be a non-empty string")
    return value


def load_config(path=None, **overrides) -> GeneratorConfig:
    """
    Load configuration from a YAML file (optional) and apply keyword overrides.

    Unknown keys are rejected so typos don't silently fall back to defaults.
    Overrides whose value is None are ignored. Every problem with the file
    is reported as a ValueError.
    """
    values = {}
    if path is not None:
        with open(Path(path), "r", encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Config file {path} is not valid YAML: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        values.update(loaded)

    values.update({k: v for k, v in overrides.items() if v is not None})

    defaults = {f.name: f.default for f in fields(GeneratorConfig)}
    unknown = sorted(set(values) - set(defaults), key=str)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(map(str, unknown))}")

    for key, value in list(values.items()):
        values[key] = _coerce(key, value, defaults[key])

    config = replace(GeneratorConfig(), **values)
    if config.jobs < 1:
        raise ValueError("jobs must be at least 1")
    if not config.file_extension.startswith("."):
        raise ValueError("file_extension must start with '.'")
    return config
