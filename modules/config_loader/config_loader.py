import dataclasses
import json
import logging
import os
import typing
from typing import Any, Callable, Mapping, Optional

from modules.config_loader.loaded_config import LoadedConfig
from modules.config_loader.validation import compile_schema, validate
from utils import constants
from utils.error_handling import handle_errors
from utils.exceptions import (
    EnvironmentVariableNotFoundError,
    JsonParsingError,
    SchemaCompilationError,
    SchemaValidationError,
)


def _reject_constant(name: str):
    raise ValueError(f"'{name}' is not valid JSON")


def _parse_json(text: str, label: str) -> Any:
    """Strict JSON parse; NaN and Infinity literals are rejected."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise JsonParsingError(f"{label}: {e}") from e


def _check_field_types(instance: Any, target: type) -> None:
    """
    Check dataclass fields against their plain annotated types.

    Parameterized hints are checked by origin (List[int] -> list); unions and
    other non-class hints are left to the target. JSON booleans never satisfy
    an int or float field, and JSON integers satisfy float fields.
    """
    hints = typing.get_type_hints(target)
    for f in dataclasses.fields(target):
        expected = hints.get(f.name)
        expected = typing.get_origin(expected) or expected
        if not isinstance(expected, type) or expected is object:
            continue

        value = getattr(instance, f.name)
        if isinstance(value, bool) and expected is not bool:
            ok = False
        elif expected is float:
            ok = isinstance(value, (int, float))
        else:
            ok = isinstance(value, expected)

        if not ok:
            raise TypeError(
                f"field '{f.name}' expects {expected.__name__}, got {type(value).__name__}"
            )


def _deserialize(value: Any, target: Optional[Callable[..., Any]]) -> Any:
    """Turn a validated JSON value into the caller's target shape."""
    if target is None:
        return value
    try:
        if isinstance(target, type) and dataclasses.is_dataclass(target) and isinstance(value, dict):
            instance = target(**value)
            _check_field_types(instance, target)
            return instance
        return target(value)
    except (TypeError, ValueError) as e:
        name = getattr(target, '__name__', repr(target))
        raise JsonParsingError(f"cannot deserialize configuration into {name}: {e}") from e


class ConfigLoader:
    """
    Loads the application configuration from the environment and validates it
    against a JSON Schema that is also supplied through the environment.

    The loader holds settings only. Every call re-reads its inputs, so two
    loads against the same environment always agree.
    """

    def __init__(self,
                 config_var: str = constants.CONFIG_ENV_VAR,
                 schema_var: str = constants.SCHEMA_ENV_VAR,
                 target: Optional[Callable[..., Any]] = None,
                 default_draft: Optional[str] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the ConfigLoader.

        Args:
            config_var (str): Environment variable holding the configuration JSON.
            schema_var (str): Environment variable holding the JSON Schema.
            target: Optional type or callable the validated value is deserialized into.
                Dataclasses receive JSON objects as keyword arguments.
            default_draft (str): Meta-schema URI used when the schema has no "$schema".
            logger: Logger to report progress to.
        """
        self.config_var = config_var
        self.schema_var = schema_var
        self.target = target
        self.default_draft = default_draft
        self.logger = logger or logging.getLogger(constants.LOGGER_NAME)

    # load() and parse() are both public entry points; each one wraps unexpected
    # faults into AppConfigError, and project errors pass through either layer
    @handle_errors("Configuration load")
    def load(self, environ: Optional[Mapping[str, str]] = None) -> LoadedConfig:
        """
        Main entry point. Reads both variables, then parses and validates.

        Args:
            environ: Mapping to read variables from. Defaults to os.environ.

        Returns:
            LoadedConfig: Present with the validated value, or absent for `null`.

        Raises:
            ConfigurationError: On the first failing step.
        """
        env = os.environ if environ is None else environ

        # 1. Read Variables (config first, so its absence always wins)
        config_text = self._read_variable(env, self.config_var)
        schema_text = self._read_variable(env, self.schema_var)

        # 2. Parse, Compile, Validate, Deserialize
        return self.parse(config_text, schema_text)

    @handle_errors("Configuration parse")
    def parse(self, config_text: str, schema_text: str) -> LoadedConfig:
        """
        Validate raw configuration text against raw schema text.

        Returns:
            LoadedConfig: Present with the validated value, or absent for `null`.

        Raises:
            JsonParsingError: If either document is malformed, or the target rejects the value.
            SchemaCompilationError: If the schema itself is invalid.
            SchemaValidationError: If the configuration violates the schema.
        """
        # 1. Parse Documents
        self.logger.debug(f"Parsing {self.config_var} ({len(config_text)} chars)")
        try:
            config = _parse_json(config_text, self.config_var)
        except JsonParsingError as e:
            self.logger.warning(f"{self.config_var} is not valid JSON: {e.diagnostic}")
            raise

        self.logger.debug(f"Parsing {self.schema_var} ({len(schema_text)} chars)")
        try:
            schema = _parse_json(schema_text, self.schema_var)
        except JsonParsingError as e:
            self.logger.warning(f"{self.schema_var} is not valid JSON: {e.diagnostic}")
            raise

        # 2. Compile Schema and Validate
        report = self._validate(config, schema)
        if not report.is_valid:
            self.logger.warning(
                f"Configuration failed schema validation with {len(report)} violation(s)",
                extra={'violations': report.to_dict(include_messages=False)}
            )
            raise SchemaValidationError(report)

        # 3. Deserialize
        if config is None:
            self.logger.info(f"Configuration in {self.config_var} is null; no configuration loaded")
            return LoadedConfig.absent()

        try:
            value = _deserialize(config, self.target)
        except JsonParsingError:
            self.logger.warning(f"Validated configuration could not be deserialized into {self.target!r}")
            raise

        self.logger.info(f"Configuration loaded from {self.config_var} and validated against {self.schema_var}")
        return LoadedConfig.present(value)

    def _read_variable(self, env: Mapping[str, str], name: str) -> str:
        text = env.get(name)
        if text is None:
            self.logger.warning(f"Environment variable {name} is not set")
            raise EnvironmentVariableNotFoundError(name)
        return text

    def _validate(self, config: Any, schema: Any):
        try:
            validator = compile_schema(schema, self.default_draft)
            report = validate(validator, config)
        except SchemaCompilationError as e:
            self.logger.warning(f"Schema in {self.schema_var} could not be used: {e}")
            raise
        self.logger.debug(f"Schema compiled with {type(validator).__name__}")
        return report


def parse_and_validate(config_text: str, schema_text: str,
                       target: Optional[Callable[..., Any]] = None, *,
                       default_draft: Optional[str] = None) -> LoadedConfig:
    """Validate explicit config/schema strings without touching the environment."""
    return ConfigLoader(target=target, default_draft=default_draft).parse(config_text, schema_text)


def load_config(target: Optional[Callable[..., Any]] = None, *,
                environ: Optional[Mapping[str, str]] = None,
                config_var: str = constants.CONFIG_ENV_VAR,
                schema_var: str = constants.SCHEMA_ENV_VAR) -> LoadedConfig:
    """
    Load the configuration from `APP_CONFIG`, validated against `APP_CONFIG_SCHEMA`.

    Args:
        target: Optional type or callable the validated value is deserialized into.
        environ: Mapping to read variables from. Defaults to os.environ.
        config_var: Name of the configuration variable.
        schema_var: Name of the schema variable.

    Returns:
        LoadedConfig: Present with the validated value, or absent for `null`.

    Raises:
        ConfigurationError: On the first failing step.
    """
    loader = ConfigLoader(config_var=config_var, schema_var=schema_var, target=target)
    return loader.load(environ)
