import pytest
import json

from modules.config_loader.validation import ValidationReport, Violation, compile_schema, validate
from utils.exceptions import SchemaCompilationError


@pytest.fixture
def port_validator():
    """Validator for an object with a required integer port."""
    return compile_schema({
        "type": "object",
        "properties": {"port": {"type": "integer", "minimum": 1}},
        "required": ["port"]
    })

def test_valid_instance_has_empty_report(port_validator):
    report = validate(port_validator, {"port": 80})

    assert report.is_valid
    assert len(report) == 0
    assert str(report) == "valid"

def test_violation_fields(port_validator):
    report = validate(port_validator, {"port": 0})

    assert len(report) == 1
    violation = report.violations[0]
    assert violation.path == ("port",)
    assert violation.schema_path == ("properties", "port", "minimum")
    assert violation.rule == "minimum"
    assert violation.pointer == "/port"
    assert str(violation) == f"/port: {violation.message} [minimum]"

def test_root_violation_renders_root(port_validator):
    report = validate(port_validator, {})

    assert report.violations[0].pointer == ""
    assert str(report).startswith("<root>: ")

def test_pointer_escapes_tokens():
    violation = Violation(path=("a/b", "c~d", 0), schema_path=(), rule="type", message="bad")
    assert violation.pointer == "/a~1b/c~0d/0"

def test_report_to_dict_is_serializable():
    validator = compile_schema({"type": "array", "items": {"type": "string"}})
    report = validate(validator, ["ok", 1, 2])

    data = report.to_dict()
    assert [d['path'] for d in data] == ["/1", "/2"]
    assert all(d['rule'] == "type" for d in data)
    json.dumps(data)

    assert all('message' not in d for d in report.to_dict(include_messages=False))

def test_format_assertions_enabled():
    validator = compile_schema({"type": "string", "format": "email"})

    assert validate(validator, "ops@example.com").is_valid
    assert validate(validator, "not-an-email").violations[0].rule == "format"

def test_boolean_schemas():
    assert validate(compile_schema(True), {"anything": 1}).is_valid

    report = validate(compile_schema(False), 1)
    assert report.violations[0].rule == "false"

def test_declared_draft_is_honoured():
    """Draft 4 uses a boolean exclusiveMaximum alongside maximum."""
    schema = {
        "$schema": "http://json-schema.org/draft-04/schema#",
        "type": "integer",
        "maximum": 10,
        "exclusiveMaximum": True
    }
    validator = compile_schema(schema)

    assert validate(validator, 9).is_valid
    assert not validate(validator, 10).is_valid

def test_default_draft_override():
    schema = {"type": "integer", "maximum": 10, "exclusiveMaximum": True}

    with pytest.raises(SchemaCompilationError):
        compile_schema(schema)

    validator = compile_schema(schema, default_draft="http://json-schema.org/draft-04/schema#")
    assert not validate(validator, 10).is_valid

def test_invalid_schema_reports_location():
    with pytest.raises(SchemaCompilationError) as exc_info:
        compile_schema({"properties": {"port": {"type": 12}}})

    assert exc_info.value.diagnostic.startswith("/properties/port/type: ")

@pytest.mark.parametrize("schema", [None, 1, "object", [1]])
def test_non_schema_documents_rejected(schema):
    with pytest.raises(SchemaCompilationError):
        compile_schema(schema)

def test_remote_reference_not_fetched():
    validator = compile_schema({"$ref": "https://example.invalid/schema.json"})

    with pytest.raises(SchemaCompilationError, match="unresolvable reference"):
        validate(validator, {})

def test_local_reference_resolves():
    validator = compile_schema({
        "$defs": {"port": {"type": "integer"}},
        "properties": {"port": {"$ref": "#/$defs/port"}}
    })

    assert validate(validator, {"port": 1}).is_valid
    assert validate(validator, {"port": "1"}).violations[0].path == ("port",)

def test_report_is_iterable():
    report = ValidationReport((Violation(("a",), (), "type", "bad"),))
    assert list(report) == list(report.violations)

@pytest.mark.parametrize("declared", [12, [], ["x"], {}, True, None])
def test_non_string_schema_uri_rejected(declared):
    with pytest.raises(SchemaCompilationError, match=r"/\$schema"):
        compile_schema({"$schema": declared, "type": "object"})

def test_array_indices_sort_numerically():
    validator = compile_schema({"type": "array", "items": {"type": "integer"}})
    report = validate(validator, ["x"] * 12)

    assert [v.path for v in report] == [(i,) for i in range(12)]
    assert report.violations[2].pointer == "/2"
    assert report.violations[10].pointer == "/10"
