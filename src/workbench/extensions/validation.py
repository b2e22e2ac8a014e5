"""
Extension declaration and configuration validation.

This module checks extension declarations before registration and validates
per-extension configuration against the JSON schema an extension publishes.
"""

import logging
from typing import Any

import jsonschema
from jsonschema import SchemaError
from jsonschema import ValidationError as JsonSchemaValidationError

from workbench.extensions.interfaces import Extension, ExtensionType
from workbench.utils.config import ValidationResult

logger = logging.getLogger(__name__)


class ExtensionValidator:
    """Validator for extension declarations and configurations."""

    def validate_declaration(self, extension: Extension, path: str | None = None) -> ValidationResult:
        """Validate an extension declaration.

        Args:
            extension: Extension to validate
            path: Path it is about to be registered under (defaults to
                ``extension.path``)

        Returns:
            ValidationResult with validation status
        """
        result = ValidationResult()
        path = path if path is not None else extension.path

        if not path or not str(path).strip():
            result.errors.append(f"{extension.__class__.__name__} has no path")
            result.valid = False

        if not isinstance(extension.type, ExtensionType):
            result.errors.append(f"{path}: unknown extension type {extension.type!r}")
            result.valid = False

        for dep in extension.deps:
            if not isinstance(dep, Extension):
                result.errors.append(f"{path}: dependency {dep!r} is not an extension")
                result.valid = False
            elif dep is extension:
                result.warnings.append(f"{path}: extension lists itself as a dependency")

        if extension.type is ExtensionType.EDITOR and not extension.content_types:
            result.warnings.append(f"{path}: editor declares no content types, it can only act as default")
        elif extension.type is not ExtensionType.EDITOR and extension.content_types:
            result.warnings.append(f"{path}: content types are ignored for {extension.type.value} extensions")

        return result

    def validate_configuration(self, extension: Extension, config: dict[str, Any]) -> ValidationResult:
        """Validate configuration against the extension's JSON schema.

        Args:
            extension: Extension the configuration is meant for
            config: Configuration to validate

        Returns:
            ValidationResult with validation status
        """
        result = ValidationResult()
        schema = extension.configuration_schema

        if not schema:
            if config:
                result.warnings.append(f"{extension.path}: configuration given but no schema declared")
            return result

        try:
            jsonschema.validate(instance=config, schema=schema)
        except JsonSchemaValidationError as e:
            location = "/".join(str(part) for part in e.absolute_path) or "<root>"
            result.errors.append(f"{extension.path}: invalid configuration at {location}: {e.message}")
            result.valid = False
        except SchemaError as e:
            result.errors.append(f"{extension.path}: invalid configuration schema: {e.message}")
            result.valid = False

        return result
