"""Tests for configuration loading and validation."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from localization_toolkit.utils.config import (
    CONFIG_FILE_NAME,
    Config,
    ConfigValidationError,
    ConfigValidationWarning,
    create_default_config,
)


class TestConfigValidation:
    """Test cases for Config.validate() method."""

    def test_valid_default_config(self):
        """Default config should pass validation."""
        errors, warnings = Config().validate()
        assert errors == []
        assert warnings == []

    def test_invalid_source_locale(self):
        """An invalid source locale should cause an error."""
        config = Config()
        config.project.source_locale = "english"
        errors, warnings = config.validate()
        assert len(errors) == 1
        assert "Invalid source locale" in errors[0]

    @pytest.mark.parametrize('locale', ['en', 'en-US', 'zh-Hans-CN', 'es-419'])
    def test_valid_source_locales(self, locale):
        """Common locale tags should pass."""
        config = Config()
        config.project.source_locale = locale
        errors, _ = config.validate()
        assert errors == []

    def test_unsupported_version(self):
        """Versions other than 1.x and 2.x should cause an error."""
        config = Config()
        config.xliff.version = "3.0"
        errors, _ = config.validate()
        assert "Unsupported xliff version" in errors[0]

    def test_non_numeric_version(self):
        """A version that is not a number should cause an error."""
        config = Config()
        config.xliff.version = "2.x"
        errors, _ = config.validate()
        assert "must be a number" in errors[0]

    def test_invalid_style(self):
        """Unknown styles should cause an error."""
        config = Config()
        config.xliff.style = "fancy"
        errors, _ = config.validate()
        assert "Invalid xliff style" in errors[0]

    def test_unknown_rule(self):
        """Unknown names in lint.rules should cause an error."""
        config = Config()
        config.lint.rules = ['resource-url-match', 'no-such-rule']
        errors, _ = config.validate()
        assert errors == ["Unknown rule in lint.rules: 'no-such-rule'"]

    def test_custom_rule_name_is_known(self):
        """Custom rules may be listed in lint.rules."""
        config = Config()
        config.lint.custom_rules = [{
            'name': 'no-todo', 'description': 'd', 'note': 'n', 'regexps': ['TODO'],
        }]
        config.lint.rules = ['no-todo']
        errors, _ = config.validate()
        assert errors == []

    def test_invalid_custom_rule(self):
        """Incomplete custom rules and bad patterns should be reported."""
        config = Config()
        config.lint.custom_rules = [
            {'name': 'broken', 'description': 'd', 'note': 'n', 'regexps': ['(']},
            {'name': 'incomplete'},
        ]
        errors, _ = config.validate()
        assert any("invalid regular expression" in error for error in errors)
        assert any("'incomplete' is missing required field 'note'" in error for error in errors)

    def test_invalid_custom_rule_severity(self):
        """Unknown severities in custom rules should be reported."""
        config = Config()
        config.lint.custom_rules = [{
            'name': 'x', 'description': 'd', 'note': 'n', 'regexps': ['a'], 'severity': 'fatal',
        }]
        errors, _ = config.validate()
        assert "invalid severity 'fatal'" in errors[0]

    def test_override_builtin_warning(self):
        """Overriding a built-in rule should produce a warning."""
        config = Config()
        config.lint.custom_rules = [{
            'name': 'resource-url-match', 'description': 'd', 'note': 'n', 'regexps': ['a'],
        }]
        errors, warnings = config.validate()
        assert errors == []
        assert len(warnings) == 1
        assert isinstance(warnings[0], ConfigValidationWarning)
        assert 'overrides the built-in rule' in str(warnings[0])

    def test_unknown_report_format_warning(self):
        """Unknown report formats should only warn."""
        config = Config()
        config.reports.format = "html"
        errors, warnings = config.validate()
        assert errors == []
        assert "Unknown report format" in str(warnings[0])

    def test_raise_on_error(self):
        """raise_on_error should raise with every error collected."""
        config = Config()
        config.project.source_locale = "english"
        config.xliff.style = "fancy"
        with pytest.raises(ConfigValidationError) as excinfo:
            config.validate(raise_on_error=True)
        assert len(excinfo.value.errors) == 2


class TestConfigFile:
    """Test cases for reading and writing the config file."""

    def test_missing_file_gives_defaults(self):
        """Without a config file the defaults should be used."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch('localization_toolkit.utils.config.Path.cwd', return_value=Path(tmpdir)):
                config = Config.from_file()
        assert config.project.source_locale == 'en-US'
        assert config.xliff.version == '1.2'

    def test_from_file(self):
        """Sections should be read into their dataclasses."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / CONFIG_FILE_NAME
            config_path.write_text(yaml.dump({
                'project': {'name': 'webapp', 'source_locale': 'en-GB'},
                'xliff': {'version': 2.0, 'style': 'custom', 'tool_id': 'loctool'},
                'lint': {'rules': ['resource-url-match'], 'fail_on_warning': True},
                'yaml': {'excluded_keys': ['routes'], 'comment_prefix': 'i18n:'},
            }), encoding='utf-8')

            config = Config.from_file(config_path)

        assert config.project.name == 'webapp'
        assert config.project.source_locale == 'en-GB'
        assert config.xliff.version == '2.0'
        assert config.xliff.style == 'custom'
        assert config.lint.rules == ['resource-url-match']
        assert config.lint.fail_on_warning is True
        assert config.yaml.excluded_keys == ['routes']
        assert config.yaml.datatype == 'x-yaml'
        assert config.reports.format == 'console'

    def test_empty_file(self):
        """An empty config file should give the defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / CONFIG_FILE_NAME
            config_path.write_text('', encoding='utf-8')
            config = Config.from_file(config_path)
        assert config.project.name == 'Unnamed Project'

    def test_save_and_reload(self):
        """Saved configs should load back unchanged."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / CONFIG_FILE_NAME
            config = create_default_config('webapp', 'de-DE')
            config.xliff.version = '2.0'
            config.save(config_path)

            loaded = Config.from_file(config_path)

        assert loaded.to_dict() == config.to_dict()

    def test_document_options(self):
        """XLIFF settings should map onto Xliff constructor arguments."""
        config = Config()
        config.xliff.tool_name = 'Localization Tool'
        options = config.xliff.document_options()
        assert options['version'] == '1.2'
        assert options['tool_name'] == 'Localization Tool'
        assert options['allow_dups'] is False
