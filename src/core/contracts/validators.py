"""
JSON Schema Contract Validators

Validation of the JSON payloads exchanged with the rendering collaborator
against formal JSON Schema contracts, using the jsonschema library.

Schemas (src/core/contracts/schema/):
- draw_descriptor.json (Drawable Descriptor Protocol)
- scale_context.json (Coordinate Scale Context)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    JSON Schema file loader.

    Looks up schemas in the schema/ directory next to this module and keeps
    every loaded schema in a cache.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'draw_descriptor')

        Returns:
            The loaded schema as a dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class for contract validators.

    Wraps validation of data against one JSON Schema.
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        """
        Args:
            schema_name: Name of the schema to validate against
            loader: Schema loader (default: the module-level loader)
        """
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate data against the schema.

        Raises:
            ValidationError: If the data does not match the schema
        """
        try:
            self.validator.validate(data)
        except ValidationError as e:
            logger.debug("%s contract violation: %s", self.schema_name, e.message)
            raise

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Check validity without raising."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Iterate over every validation error found in data."""
        return self.validator.iter_errors(data)

    def get_validation_errors(self, data: Dict[str, Any]) -> List[str]:
        """
        All validation error messages, prefixed with the failing path.

        Returns:
            Empty list if the data is valid
        """
        messages = []
        for error in sorted(self.iter_errors(data), key=lambda e: list(e.absolute_path)):
            path = "/".join(str(part) for part in error.absolute_path) or "<root>"
            messages.append(f"{path}: {error.message}")
        return messages


class DrawDescriptorValidator(ContractValidator):
    """Validator for the draw_descriptor contract."""

    def __init__(self):
        super().__init__("draw_descriptor")


class ScaleContextValidator(ContractValidator):
    """Validator for the scale_context contract."""

    def __init__(self):
        super().__init__("scale_context")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_draw_descriptor(data: Dict[str, Any]) -> None:
    """
    Validate a draw descriptor payload.

    Raises:
        ValidationError: If the data does not match the schema
    """
    DrawDescriptorValidator().validate(data)


def validate_scale_context(data: Dict[str, Any]) -> None:
    """
    Validate a scale context payload.

    Raises:
        ValidationError: If the data does not match the schema
    """
    ScaleContextValidator().validate(data)
