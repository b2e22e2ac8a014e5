"""
Unit tests for WorkbenchSettings, CLI helpers and logging setup.
"""

import json
import logging

import click
import pytest

import workbench.utils.config as config_module
from workbench.extensions import DependencyInUseError, ExtensionError, NoEditorAvailableError
from workbench.utils.config import ValidationResult, WorkbenchSettings
from workbench.utils.errors import WorkbenchError
from workbench.utils.helpers import parse_extension_specs, settings_with_extensions
from workbench.utils.logging import configure_logging, setup_logging

pytestmark = pytest.mark.unit


class TestWorkbenchSettings:
    """Test settings loading and validation."""

    def test_defaults(self):
        settings = WorkbenchSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.extensions_auto_load == {}
        assert settings.dialogs_enabled is True
        assert settings.get_manifest_path() is None

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("WORKBENCH_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("WORKBENCH_EXTENSIONS_AUTO_LOAD", '{"ext/code": "pkg.editors:Code"}')

        settings = WorkbenchSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.extensions_auto_load == {"ext/code": "pkg.editors:Code"}

    def test_reload_settings(self, monkeypatch):
        monkeypatch.setenv("WORKBENCH_DEFAULT_LAYOUT_MODE", "ext/split")

        reloaded = config_module.reload_settings()

        assert reloaded.default_layout_mode == "ext/split"
        assert config_module.get_settings() is reloaded

        monkeypatch.delenv("WORKBENCH_DEFAULT_LAYOUT_MODE")
        config_module.reload_settings()

    def test_valid_settings(self):
        settings = WorkbenchSettings(
            _env_file=None,
            extensions_auto_load={"ext/split": "pkg.layouts:Split"},
            default_layout_mode="ext/split",
        )

        result = settings.validate_settings()

        assert result.valid
        assert result.warnings == []

    def test_invalid_settings(self):
        settings = WorkbenchSettings(
            _env_file=None,
            log_level="LOUD",
            extensions_auto_load={"ext/code": ":Code"},
        )

        result = settings.validate_settings()

        assert not result.valid
        assert len(result.errors) == 2

    def test_warnings(self):
        settings = WorkbenchSettings(
            _env_file=None,
            extensions_config={"ext/other": {"x": 1}},
            default_layout_mode="ext/split",
        )

        result = settings.validate_settings()

        assert result.valid
        assert len(result.warnings) == 2

    def test_validation_result_merge(self):
        result = ValidationResult(warnings=["first"])
        result.merge(ValidationResult(valid=False, errors=["broken"], warnings=["second"]))

        assert not result.valid
        assert result.errors == ["broken"]
        assert result.warnings == ["first", "second"]


class TestCliHelpers:
    """Test command line helpers."""

    def test_parse_extension_specs(self):
        assert parse_extension_specs(("ext/a=pkg:A", " ext/b = pkg.b:B ")) == {
            "ext/a": "pkg:A",
            "ext/b": "pkg.b:B",
        }

    @pytest.mark.parametrize("spec", ["pkg:A", "=pkg:A", "ext/a="])
    def test_parse_extension_specs_rejects(self, spec):
        with pytest.raises(click.BadParameter):
            parse_extension_specs((spec,))

    def test_settings_with_extensions(self):
        base = WorkbenchSettings(
            _env_file=None,
            extensions_auto_load={"ext/a": "pkg:A"},
            manifest_path="/tmp/manifest.json",
        )

        merged = settings_with_extensions(("ext/b=pkg:B",), base)

        assert merged.extensions_auto_load == {"ext/a": "pkg:A", "ext/b": "pkg:B"}
        assert merged.manifest_path is None
        assert base.extensions_auto_load == {"ext/a": "pkg:A"}


class TestErrors:
    """Test the error hierarchy."""

    def test_extension_errors_are_workbench_errors(self):
        error = ExtensionError("boom", "ext/a")

        assert isinstance(error, WorkbenchError)
        assert error.error_code == "EXTENSIONERROR"
        assert error.context == {"extension_path": "ext/a"}

    def test_in_use_error_suggestions(self):
        error = DependencyInUseError("in use", ["ext/b", "ext/c"], "ext/a")

        assert error.suggestions == ["Unregister ext/b first", "Unregister ext/c first"]

    def test_no_editor_error(self):
        error = NoEditorAvailableError("no editor", "text/plain", "notes.txt")

        assert error.content_type == "text/plain"
        assert error.document_key == "notes.txt"
        assert error.suggestions


class TestLogging:
    """Test setup_logging() and configure_logging()."""

    def test_structured_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "workbench.log"
        logger = setup_logging("workbench.tests.structured", level="INFO", structured=True, log_file=log_file)
        logger.propagate = False

        logger.info("extension registered")
        for handler in logger.handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["message"] == "extension registered"
        assert record["levelname"] == "INFO"

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_handlers_are_not_duplicated(self):
        logger = setup_logging("workbench.tests.console", level="WARNING")
        again = setup_logging("workbench.tests.console", level="WARNING")

        assert again is logger
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

        logger.removeHandler(logger.handlers[0])

    def test_module_loggers_defer_to_parent(self):
        logger = setup_logging("workbench.tests.quiet")

        assert logger.handlers == []
        assert logger.level == logging.NOTSET

    def test_configure_logging_replaces_package_handlers(self, tmp_path):
        log_file = tmp_path / "cli.log"
        package_logger = logging.getLogger("workbench")
        try:
            configure_logging(level="DEBUG", structured=True)
            logger = configure_logging(level="DEBUG", structured=True, log_file=log_file)

            assert logger is package_logger
            assert len(logger.handlers) == 2
            assert logger.level == logging.DEBUG
            assert logger.propagate is False

            logging.getLogger("workbench.extensions.registry").debug("registered ext/code")
            for handler in logger.handlers:
                handler.flush()

            record = json.loads(log_file.read_text().strip().splitlines()[-1])
            assert record["name"] == "workbench.extensions.registry"
            assert record["message"] == "registered ext/code"
        finally:
            for handler in list(package_logger.handlers):
                handler.close()
                package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
            package_logger.propagate = True

    def test_configure_logging_tolerates_unknown_level(self):
        package_logger = logging.getLogger("workbench")
        try:
            logger = configure_logging(level="LOUD")

            assert logger.level == logging.INFO
        finally:
            for handler in list(package_logger.handlers):
                handler.close()
                package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
            package_logger.propagate = True
