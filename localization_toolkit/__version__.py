"""Version information for localization-toolkit."""

__version__ = "0.4.0"
__author__ = "Sezgin Paksoy"
__description__ = "XLIFF conversion, resource extraction and translation linting"

# Changelog:
# 0.4.0 - YAML resource files
#       - New 'extract' and 'localize' commands
#       - YamlFile adapter with translator comments and excluded keys
#       - Untranslated strings can be written to a separate XLIFF file
#       - Localized files are paired with their source strings by key
#
# 0.3.0 - Declarative lint rules
#       - New 'lint' and 'rules' commands
#       - resource-matcher, resource-source and resource-target rule types
#       - Custom rules from the lint section of .localization.yml
#       - Plural syntax is stripped before matching when requested
#       - Console and JSON reports with file and result statistics
#       - --fail-on-warning flag for CI/CD
#
# 0.2.0 - XLIFF 2.0 support
#       - Standard and custom (loctool) 2.0 dialects
#       - Inline markup (<ph>, <mrk>) kept as text on parse
#       - New 'convert' command between versions and styles
#       - Target locale mismatch reported for 2.0 documents
#
# 0.1.0 - Initial release
#       - XLIFF 1.2 reading and writing
#       - Translation unit deduplication and merging
#       - Line and character positions of parsed units
#       - 'init' and 'info' commands
#       - Config validation and structured logging
