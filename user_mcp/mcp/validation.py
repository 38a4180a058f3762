"""Argument validation for tool calls.

Tool parameter shapes are pydantic models. Validation failures are reduced
to a single ArgumentValidationError naming the field, the expected JSON
type and what was actually received.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import ArgumentValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def json_type_name(value: Any) -> str:
    """JSON type name of a Python value decoded from JSON."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list | tuple):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _deref(node: dict[str, Any], defs: dict[str, Any]) -> dict[str, Any]:
    ref = node.get("$ref")
    if ref:
        return defs.get(ref.rsplit("/", 1)[-1], {})
    return node


def _schema_type(node: dict[str, Any], defs: dict[str, Any]) -> str:
    node = _deref(node, defs)
    if "type" in node:
        # Integers are reported as numbers
        return "number" if node["type"] == "integer" else node["type"]
    options = node.get("anyOf") or node.get("oneOf") or []
    names: list[str] = []
    for option in options:
        name = _schema_type(option, defs)
        if name != "null" and name not in names:
            names.append(name)
    return " | ".join(names) if names else "any"


def resolve_field(model: type[BaseModel], loc: tuple[Any, ...]) -> tuple[str, str]:
    """Resolve an error location to (dotted field path, expected JSON type).

    Location parts that are not schema properties, such as the member tags
    pydantic adds for union fields, are dropped from the path.
    """
    schema = model.model_json_schema()
    defs = schema.get("$defs", {})
    node: dict[str, Any] = schema
    path: list[str] = []
    for part in loc:
        node = _deref(node, defs)
        if isinstance(part, int):
            node = node.get("items", {})
            path.append(str(part))
            continue
        properties = node.get("properties", {})
        if part not in properties:
            break
        node = properties[part]
        path.append(part)
    return ".".join(path) or "arguments", _schema_type(node, defs)


def validate_arguments(model: type[ModelT], raw: Any) -> ModelT:
    """Validate raw tool arguments against a parameter model.

    ``None`` is treated as an empty object. Unknown keys pass through.

    Raises:
        ArgumentValidationError: on the first missing or mistyped field
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ArgumentValidationError(
            field="arguments",
            expected_type="object",
            received=json_type_name(raw),
        )

    try:
        return model.model_validate(raw)
    except ValidationError as e:
        error = e.errors()[0]
        loc = tuple(error.get("loc", ()))
        received = "missing" if error["type"] == "missing" else json_type_name(error.get("input"))
        field, expected = resolve_field(model, loc)
        raise ArgumentValidationError(
            field=field,
            expected_type=expected,
            received=received,
            reason=f"{error['msg']} (expected {expected}, received {received})",
        ) from e
