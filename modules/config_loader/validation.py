"""
Schema compilation and structured validation outcomes.

The schema engine is `jsonschema`; this module only adapts its validator
selection and error objects into the loader's own types.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from referencing import Registry
from referencing.exceptions import Unresolvable

from utils import constants
from utils.exceptions import SchemaCompilationError

PathElement = Union[str, int]


def _escape_pointer_token(token: PathElement) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def _path_key(path: Tuple[PathElement, ...]):
    # Array indices sort numerically and ahead of object keys
    return tuple((isinstance(p, str), p) for p in path)


@dataclass(frozen=True)
class Violation:
    """A single schema violation found in the configuration."""

    path: Tuple[PathElement, ...]
    schema_path: Tuple[PathElement, ...]
    rule: str
    message: str

    @property
    def pointer(self) -> str:
        """JSON Pointer to the offending value ('' is the document root)."""
        return "".join("/" + _escape_pointer_token(token) for token in self.path)

    def to_dict(self, include_message: bool = True) -> Dict[str, Any]:
        data = {
            'path': self.pointer,
            'schema_path': "".join("/" + _escape_pointer_token(t) for t in self.schema_path),
            'rule': self.rule,
        }
        # Engine messages quote the offending value
        if include_message:
            data['message'] = self.message
        return data

    def __str__(self) -> str:
        return f"{self.pointer or '<root>'}: {self.message} [{self.rule}]"


@dataclass(frozen=True)
class ValidationReport:
    """Every violation produced by one validation run, in a stable order."""

    violations: Tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self):
        return iter(self.violations)

    def to_dict(self, include_messages: bool = True) -> List[Dict[str, Any]]:
        return [v.to_dict(include_message=include_messages) for v in self.violations]

    def __str__(self) -> str:
        if self.is_valid:
            return "valid"
        return "\n".join(str(v) for v in self.violations)


def compile_schema(schema: Any, default_draft: Optional[str] = None):
    """
    Build a validator for `schema`.

    The draft is taken from the schema's own "$schema" keyword, falling back
    to `default_draft` (a meta-schema URI). Format assertions are enabled.

    Raises:
        SchemaCompilationError: If the document is not a valid JSON Schema.
    """
    if not isinstance(schema, (dict, bool)):
        raise SchemaCompilationError(
            f"schema must be a JSON object or boolean, got {type(schema).__name__}"
        )

    if isinstance(schema, dict) and "$schema" in schema and not isinstance(schema["$schema"], str):
        declared = schema["$schema"]
        raise SchemaCompilationError(
            f"/$schema: must be a meta-schema URI string, got {type(declared).__name__}"
        )

    default_cls = validator_for({"$schema": default_draft or constants.DEFAULT_SCHEMA_DRAFT})
    cls = validator_for(schema, default=default_cls)

    try:
        cls.check_schema(schema)
    except SchemaError as e:
        location = "".join("/" + _escape_pointer_token(t) for t in e.absolute_path)
        raise SchemaCompilationError(f"{location or '<root>'}: {e.message}") from e

    # Empty registry: "$ref" never reaches the network
    return cls(schema, registry=Registry(), format_checker=cls.FORMAT_CHECKER)


def validate(validator, instance: Any) -> ValidationReport:
    """
    Validate `instance`, collecting every violation into a report.

    Raises:
        SchemaCompilationError: If a "$ref" in the schema cannot be resolved.
    """
    try:
        errors = list(validator.iter_errors(instance))
    except Unresolvable as e:
        raise SchemaCompilationError(f"unresolvable reference: {e}") from e

    violations = [
        Violation(
            path=tuple(error.absolute_path),
            schema_path=tuple(error.absolute_schema_path),
            rule=str(error.validator) if error.validator is not None else "false",
            message=error.message,
        )
        for error in errors
    ]
    violations.sort(key=lambda v: (_path_key(v.path), _path_key(v.schema_path)))
    return ValidationReport(tuple(violations))
