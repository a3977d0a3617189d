"""JSON Schema checks for task input and output documents.

Schemas ship inside the package (``notifykit/schemas/``). They only check
document shape and reject unknown keys; field semantics (required
credentials, ranges, truncation) belong to the service configuration models.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as JSONSchemaError

SCHEMAS_ROOT = Path(__file__).parent / "schemas"


class SchemaValidationError(Exception):
    """A document does not match its schema.

    Attributes:
        errors: One "At '<path>': <problem>" line per violation, sorted by path.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__(f"{len(errors)} schema violation(s): {'; '.join(errors)}")
        self.errors = errors


def load_schema(relative_path: str, *, root: str | Path | None = None) -> dict[str, Any]:
    """Read a schema given its path under ``root`` (the bundled schemas by default).

    Raises:
        FileNotFoundError: If there is no such schema.
        json.JSONDecodeError: If the schema is not valid JSON.
    """
    path = Path(root) if root else SCHEMAS_ROOT
    return json.loads((path / relative_path).read_text())


def validate(instance: Any, schema: dict[str, Any]) -> None:
    """Check ``instance`` against ``schema`` and report every violation at once.

    Raises:
        SchemaValidationError: If the instance does not match.
    """
    violations = sorted(
        Draft202012Validator(schema).iter_errors(instance),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    if violations:
        raise SchemaValidationError([_describe(v) for v in violations])


def _describe(violation: JSONSchemaError) -> str:
    location = ".".join(str(p) for p in violation.absolute_path) or "(root)"
    return f"At '{location}': {violation.message}"
