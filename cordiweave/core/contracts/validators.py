"""
Request contract of the checkout API

The calculate-totals body is checked against a JSON Schema (jsonschema,
Draft 2020-12) before it reaches the calculator. The contract covers shape
only: field presence, JSON types and unknown keys. Cart semantics (empty
carts, non-positive quantities) belong to the calculator and surface as
InvalidCartError.

Schemas ship as package data in cordiweave/core/contracts/schema/.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from jsonschema import Draft202012Validator, SchemaError
from jsonschema.exceptions import best_match

SCHEMA_DIR = Path(__file__).parent / "schema"

CALCULATE_TOTALS_REQUEST = "calculate_totals_request"


@lru_cache(maxsize=None)
def load_schema(schema_name: str, schema_dir: Path = SCHEMA_DIR) -> Dict[str, Any]:
    """
    Read and meta-validate ``<schema_dir>/<schema_name>.json``.

    Raises:
        FileNotFoundError: If the schema file does not exist
        ValueError: If the file is not a valid Draft 2020-12 schema
    """
    schema_path = schema_dir / f"{schema_name}.json"
    if not schema_path.is_file():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

    return schema


class ContractValidator:
    """Checks JSON bodies against one schema."""

    def __init__(self, schema_name: str, schema_dir: Path = SCHEMA_DIR):
        self.schema_name = schema_name
        self._validator = Draft202012Validator(load_schema(schema_name, schema_dir))

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def first_error_message(self, data: Any) -> Optional[str]:
        """
        Message for the most relevant violation, or None if data conforms.

        Prefixed with the dotted path of the offending value, e.g.
        ``items.0.quantity: 'two' is not of type 'integer'``.
        """
        error = best_match(self._validator.iter_errors(data))
        if error is None:
            return None
        path = ".".join(str(p) for p in error.absolute_path)
        return f"{path}: {error.message}" if path else error.message


class CalculateTotalsRequestValidator(ContractValidator):
    """Body of POST /orders/calculate-totals."""

    def __init__(self):
        super().__init__(CALCULATE_TOTALS_REQUEST)
