"""
Custom exception hierarchy for the environment-sourced configuration loader.
"""


class AppConfigError(Exception):
    """Base exception for all system errors."""
    pass


class ConfigurationError(AppConfigError):
    """Configuration loading or validation failed."""
    pass


class EnvironmentVariableNotFoundError(ConfigurationError):
    """A required environment variable is not set."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"EnvironmentVariableNotFound({variable})")


class JsonParsingError(ConfigurationError):
    """Text was not valid JSON, or could not be deserialized into the target."""

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(f"JSON Parsing Error: {diagnostic}")


class SchemaCompilationError(ConfigurationError):
    """The schema document is not a usable JSON Schema."""

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(f"JSON Schema Compilation Error: {diagnostic}")


class SchemaValidationError(ConfigurationError):
    """The configuration does not satisfy the schema."""

    def __init__(self, report):
        # report is a ValidationReport; str() renders every violation
        self.report = report
        super().__init__(f"JSON Schema Validation Error: {report}")


class ConfigNotLoadedError(AppConfigError):
    """Tried to read a configuration value that is absent."""
    pass
