"""
Configuration Loader Module
===========================

Responsibility:
- Read the configuration and its JSON Schema from environment variables.
- Strict JSON parsing of both documents.
- Schema compilation and full validation with a structured violation report.
- Explicit present/absent result for the `null` configuration.
"""

from .config_loader import ConfigLoader, load_config, parse_and_validate
from .loaded_config import LoadedConfig
from .validation import ValidationReport, Violation, compile_schema, validate

__all__ = [
    'ConfigLoader',
    'LoadedConfig',
    'ValidationReport',
    'Violation',
    'compile_schema',
    'load_config',
    'parse_and_validate',
    'validate',
]
