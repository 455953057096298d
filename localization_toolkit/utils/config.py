"""Configuration management for the localization toolkit."""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import asdict, dataclass, field

from .validators import is_valid_locale, validate_rule_definition
from ..rules.builtin import BUILTIN_RULES

CONFIG_FILE_NAME = '.localization.yml'

VALID_STYLES = ('standard', 'custom')
VALID_REPORT_FORMATS = ('console', 'json')


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class ProjectConfig:
    """Project configuration."""
    name: str = "Unnamed Project"
    source_locale: str = "en-US"


@dataclass
class XliffConfig:
    """XLIFF output configuration."""
    version: str = "1.2"
    style: str = "standard"  # standard | custom
    allow_dups: bool = False
    tool_id: Optional[str] = None
    tool_name: Optional[str] = None
    tool_version: Optional[str] = None
    tool_company: Optional[str] = None
    copyright: Optional[str] = None

    def document_options(self) -> Dict[str, Any]:
        """Keyword arguments for the Xliff constructor."""
        return {
            'version': self.version,
            'style': self.style,
            'allow_dups': self.allow_dups,
            'tool_id': self.tool_id,
            'tool_name': self.tool_name,
            'tool_version': self.tool_version,
            'tool_company': self.tool_company,
            'copyright': self.copyright,
        }


@dataclass
class LintConfig:
    """Lint configuration."""
    # Empty means every registered rule
    rules: List[str] = field(default_factory=list)
    # Declarative rule definitions (name, description, note, regexps, ...)
    custom_rules: List[Dict[str, Any]] = field(default_factory=list)
    fail_on_warning: bool = False


@dataclass
class YamlConfig:
    """YAML resource file configuration."""
    excluded_keys: List[str] = field(default_factory=list)
    comment_prefix: Optional[str] = None
    datatype: str = "x-yaml"


@dataclass
class ReportsConfig:
    """Reports configuration."""
    format: str = "console"
    output: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    xliff: XliffConfig = field(default_factory=XliffConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    yaml: YamlConfig = field(default_factory=YamlConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            # Look for .localization.yml in current directory
            config_path = Path.cwd() / CONFIG_FILE_NAME

            if not config_path.exists():
                # Return default config
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        xliff_data = dict(data.get('xliff') or {})
        if 'version' in xliff_data:
            # "version: 2.0" loads as a float
            xliff_data['version'] = str(xliff_data['version'])

        return cls(
            project=ProjectConfig(**(data.get('project') or {})),
            xliff=XliffConfig(**xliff_data),
            lint=LintConfig(**(data.get('lint') or {})),
            yaml=YamlConfig(**(data.get('yaml') or {})),
            reports=ReportsConfig(**(data.get('reports') or {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'project': asdict(self.project),
            'xliff': asdict(self.xliff),
            'lint': asdict(self.lint),
            'yaml': asdict(self.yaml),
            'reports': asdict(self.reports),
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not is_valid_locale(self.project.source_locale):
            errors.append(
                f"Invalid source locale: '{self.project.source_locale}'. "
                f"Use a BCP-47 tag (e.g., 'en-US', 'zh-Hans-CN')"
            )

        version = str(self.xliff.version)
        if not version.startswith(('1', '2')):
            errors.append(f"Unsupported xliff version '{version}'. Use 1.2 or 2.0")
        else:
            try:
                float(version)
            except ValueError:
                errors.append(f"xliff version must be a number, got '{version}'")

        if self.xliff.style not in VALID_STYLES:
            errors.append(
                f"Invalid xliff style '{self.xliff.style}'. "
                f"Valid options: {', '.join(VALID_STYLES)}"
            )

        builtin_names = {definition['name'] for definition in BUILTIN_RULES}
        custom_names = set()
        for definition in self.lint.custom_rules:
            errors.extend(validate_rule_definition(definition))
            name = definition.get('name') if isinstance(definition, dict) else None
            if name in builtin_names:
                warnings.append(ConfigValidationWarning(
                    f"Custom rule '{name}' overrides the built-in rule of the same name"
                ))
            if name:
                custom_names.add(name)

        known_rules = builtin_names | custom_names
        for rule in self.lint.rules:
            if rule not in known_rules:
                errors.append(f"Unknown rule in lint.rules: '{rule}'")

        if self.reports.format not in VALID_REPORT_FORMATS:
            warnings.append(ConfigValidationWarning(
                f"Unknown report format: '{self.reports.format}'. "
                f"Valid options: {', '.join(VALID_REPORT_FORMATS)}"
            ))

        # Raise error if requested
        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def create_default_config(project_name: Optional[str] = None, source_locale: str = 'en-US') -> Config:
    """Create default configuration for a project."""
    config = Config()
    if project_name:
        config.project.name = project_name
    config.project.source_locale = source_locale
    return config
