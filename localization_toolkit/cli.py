"""Command-line interface for the localization toolkit."""

import sys
import json
import argparse
from dataclasses import replace
from pathlib import Path

import yaml
from lxml import etree

from .__version__ import __version__
from .utils.colors import Colors
from .utils.config import Config, create_default_config, ConfigValidationError, CONFIG_FILE_NAME
from .utils.logging import configure_logging, get_logger
from .core.xliff import Xliff, MismatchedTargetLocaleError
from .filetypes.yaml_file import YamlFile
from .features.linter import XliffLinter
from .rules.builtin import RuleManager
from .rules.declarative import RuleDefinitionError
from .reports.json_reporter import JSONReporter
from .reports.console_reporter import ConsoleReporter

# Input problems reported as a failed command instead of a traceback
INPUT_ERRORS = (OSError, etree.XMLSyntaxError, yaml.YAMLError)


def load_and_validate_config(validate: bool = True, verbose: bool = False) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        validate: Whether to validate the config
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.from_file()
    logger = get_logger()

    if validate:
        errors, warnings = config.validate()

        if verbose and warnings:
            for warning in warnings:
                logger.warning(f"Config warning: {warning}")

        if errors:
            logger.fail("Configuration errors:")
            for error in errors:
                logger.error(f"   • {error}")
            raise ConfigValidationError(errors)

    return config


def _xliff_options(config: Config, args) -> dict:
    options = config.xliff.document_options()
    options['source_locale'] = config.project.source_locale
    options['project'] = config.project.name
    if getattr(args, 'xliff_version', None):
        options['version'] = args.xliff_version
    if getattr(args, 'style', None):
        options['style'] = args.style
    return options


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILE_NAME
    logger = get_logger()

    if config_path.exists() and not args.force:
        logger.fail(f"Config already exists: {config_path}")
        logger.info("   Use --force to overwrite")
        return 1

    config = create_default_config(
        project_name=getattr(args, 'name', None),
        source_locale=getattr(args, 'source_locale', None) or 'en-US',
    )
    config.save(config_path)

    logger.success(f"Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {CONFIG_FILE_NAME} to configure your project")
    print(f"2. Run: localization-toolkit extract config/locales/en-US.yml -o strings.xliff")

    return 0


def cmd_lint(args):
    """Lint XLIFF files."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    logger = get_logger()

    rule_names = [name.strip() for name in args.rules.split(',') if name.strip()] if args.rules else config.lint.rules
    try:
        manager = RuleManager(config.lint.custom_rules)
        rules = manager.get_rules(rule_names)
    except (KeyError, RuleDefinitionError) as e:
        logger.fail(f"Cannot load rules: {e}")
        return 1

    linter = XliffLinter(rules)
    try:
        lint_result = linter.lint_files(args.files)
    except INPUT_ERRORS as e:
        logger.fail(f"Cannot lint files: {e}")
        return 1

    report_format = args.format or config.reports.format
    output = args.output or config.reports.output

    if report_format == 'json':
        if output:
            path = JSONReporter.generate(
                config.project.name, lint_result.results, Path(output),
                lint_result.result_stats, lint_result.file_stats,
            )
            logger.success(f"JSON report: {path}")
        else:
            sys.stdout.write(JSONReporter.format(
                config.project.name, lint_result.results,
                lint_result.result_stats, lint_result.file_stats,
            ))
    else:
        ConsoleReporter.print_results(lint_result.results, use_colors=not args.no_color)
        ConsoleReporter.print_summary(lint_result.result_stats, lint_result.file_stats)

    fail_on_warning = args.fail_on_warning or config.lint.fail_on_warning
    if lint_result.errors or (fail_on_warning and lint_result.warnings):
        return 1
    return 0


def _yaml_adapter(config: Config, path: str, locale=None) -> YamlFile:
    return YamlFile(
        path,
        project=config.project.name,
        source_locale=config.project.source_locale,
        locale=locale,
        datatype=config.yaml.datatype,
        excluded_keys=config.yaml.excluded_keys,
        comment_prefix=config.yaml.comment_prefix,
    )


def cmd_extract(args):
    """Extract strings from YAML files into an XLIFF file."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    logger = get_logger()
    xliff = Xliff(**_xliff_options(config, args))

    try:
        for path in args.files:
            adapter = _yaml_adapter(config, path)
            units = adapter.extract()

            if args.locale:
                units = [replace(unit, target_locale=args.locale) for unit in units]
                localized_path = Path(adapter.get_localized_path(args.locale))
                if localized_path.exists():
                    localized = _yaml_adapter(config, str(localized_path), locale=args.locale)
                    translated = {
                        unit.key: unit.target for unit in localized.parse(
                            localized_path.read_text(encoding='utf-8'),
                            source_units={unit.key: unit for unit in units},
                        )
                    }
                    units = [replace(unit, target=translated.get(unit.key)) for unit in units]

            xliff.add_translation_units(units)
            logger.info(f"{path}: {len(units)} strings")

        output = xliff.save(args.output)
    except MismatchedTargetLocaleError as e:
        logger.fail(str(e))
        return 1
    except INPUT_ERRORS as e:
        logger.fail(f"Cannot extract strings: {e}")
        return 1

    logger.success(f"Wrote {xliff.size()} units to {output}")
    return 0


def cmd_convert(args):
    """Rewrite an XLIFF file in another version or style."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    logger = get_logger()

    try:
        units = Xliff().load(args.input)
        target = Xliff(**_xliff_options(config, args))
        target.add_translation_units(units)
        output = target.save(args.output)
    except MismatchedTargetLocaleError as e:
        logger.fail(f"{e}. XLIFF 2.0 files hold a single target locale.")
        return 1
    except INPUT_ERRORS as e:
        logger.fail(f"Cannot convert {args.input}: {e}")
        return 1

    logger.success(f"Converted {target.size()} units to XLIFF {target.get_version()}: {output}")
    return 0


def cmd_localize(args):
    """Write a localized copy of a YAML file from an XLIFF file."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    logger = get_logger()

    try:
        units = Xliff().load(args.xliff)
        translations = {
            unit.key: unit for unit in units
            if unit.target and unit.target_locale == args.locale
        }

        adapter = _yaml_adapter(config, args.file)
        adapter.extract()
        output = adapter.localize(translations, args.locale, args.output)

        if args.new_xliff and adapter.new_units:
            pending = Xliff(**_xliff_options(config, args))
            pending.add_translation_units(adapter.new_units)
            pending.save(args.new_xliff)
            logger.info(f"New strings written to {args.new_xliff}")
    except MismatchedTargetLocaleError as e:
        logger.fail(str(e))
        return 1
    except INPUT_ERRORS as e:
        logger.fail(f"Cannot localize {args.file}: {e}")
        return 1

    if adapter.new_units:
        logger.warning(f"{len(adapter.new_units)} strings have no translation for {args.locale}")
    logger.success(f"Wrote {output}")
    return 0


def cmd_info(args):
    """Show unit, line and byte counts of XLIFF files."""
    logger = get_logger()
    status = 0

    for path in args.files:
        xliff = Xliff()
        try:
            units = xliff.load(path)
        except INPUT_ERRORS as e:
            logger.fail(f"Cannot read {path}: {e}")
            status = 1
            continue

        print(f"{Colors.bold(path)}: {len(units)} units, {xliff.get_lines()} lines, {xliff.get_bytes()} bytes")
        if args.units:
            print(json.dumps([unit.to_dict() for unit in units], indent=2, ensure_ascii=False))

    return status


def cmd_rules(args):
    """List available rules."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    manager = RuleManager(config.lint.custom_rules)

    print(f"\n{Colors.bold('AVAILABLE RULES')}")
    print("-" * 70)
    for name in manager.get_names():
        definition = manager.get_definition(name)
        rule_type = definition.get('type', 'resource-matcher')
        severity = definition.get('severity', 'error')
        print(f"{Colors.info(name)} [{rule_type}, {severity}]")
        print(f"   {definition.get('description', '')}")

    return 0


def main(argv=None):
    """Main CLI entry point."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--verbose', '-v', action='store_true', help='Show detailed output')
    common.add_argument('--quiet', '-q', action='store_true', help='Only show warnings and errors')
    common.add_argument('--log-file', metavar='PATH', help='Also write a debug log to this file')
    common.add_argument('--no-color', action='store_true', help='Disable ANSI colors')

    parser = argparse.ArgumentParser(
        prog='localization-toolkit',
        description='XLIFF conversion, resource extraction and translation linting',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', parents=[common], help='Initialize configuration file')
    init_parser.add_argument('--name', help='Project name')
    init_parser.add_argument('--source-locale', help='Source locale (default: en-US)')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # lint command
    lint_parser = subparsers.add_parser('lint', parents=[common], help='Check translations in XLIFF files')
    lint_parser.add_argument('files', nargs='+', metavar='FILE', help='XLIFF files')
    lint_parser.add_argument('--format', '-f', choices=['console', 'json'], help='Report format')
    lint_parser.add_argument('--output', '-o', metavar='PATH', help='Write the report to a file')
    lint_parser.add_argument('--rules', metavar='NAMES', help='Comma separated rule names')
    lint_parser.add_argument('--fail-on-warning', action='store_true', help='Exit with error on warnings')

    # extract command
    extract_parser = subparsers.add_parser('extract', parents=[common], help='Extract YAML strings into XLIFF')
    extract_parser.add_argument('files', nargs='+', metavar='YAML', help='Source YAML files')
    extract_parser.add_argument('--output', '-o', required=True, metavar='PATH', help='XLIFF file to write')
    extract_parser.add_argument('--locale', '-l', help='Target locale of the extracted units')
    extract_parser.add_argument('--xliff-version', metavar='VERSION', help='XLIFF version (1.2 or 2.0)')
    extract_parser.add_argument('--style', choices=['standard', 'custom'], help='XLIFF 2.0 style')

    # convert command
    convert_parser = subparsers.add_parser('convert', parents=[common], help='Convert an XLIFF file')
    convert_parser.add_argument('input', metavar='IN', help='XLIFF file to read')
    convert_parser.add_argument('--output', '-o', required=True, metavar='PATH', help='XLIFF file to write')
    convert_parser.add_argument('--xliff-version', metavar='VERSION', help='XLIFF version (1.2 or 2.0)')
    convert_parser.add_argument('--style', choices=['standard', 'custom'], help='XLIFF 2.0 style')

    # localize command
    localize_parser = subparsers.add_parser('localize', parents=[common], help='Write a localized YAML file')
    localize_parser.add_argument('file', metavar='YAML', help='Source YAML file')
    localize_parser.add_argument('--xliff', required=True, metavar='PATH', help='XLIFF file with translations')
    localize_parser.add_argument('--locale', '-l', required=True, help='Target locale')
    localize_parser.add_argument('--output', '-o', metavar='PATH', help='Output file (default: next to the source)')
    localize_parser.add_argument('--new-xliff', metavar='PATH', help='Write untranslated strings to this XLIFF file')

    # info command
    info_parser = subparsers.add_parser('info', parents=[common], help='Show XLIFF file statistics')
    info_parser.add_argument('files', nargs='+', metavar='FILE', help='XLIFF files')
    info_parser.add_argument('--units', action='store_true', help='Dump the units as JSON')

    # rules command
    subparsers.add_parser('rules', parents=[common], help='List available rules')

    args = parser.parse_args(argv)

    if args.command:
        configure_logging(
            verbose=args.verbose,
            quiet=args.quiet,
            log_file=Path(args.log_file) if args.log_file else None,
            use_colors=not args.no_color,
        )

    # Execute command
    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'lint':
        return cmd_lint(args)
    elif args.command == 'extract':
        return cmd_extract(args)
    elif args.command == 'convert':
        return cmd_convert(args)
    elif args.command == 'localize':
        return cmd_localize(args)
    elif args.command == 'info':
        return cmd_info(args)
    elif args.command == 'rules':
        return cmd_rules(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
