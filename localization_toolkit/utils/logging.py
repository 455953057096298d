"""Console and file logging for the localization toolkit."""

import logging
import sys
from typing import Optional
from pathlib import Path
from .colors import Colors

ROOT_LOGGER_NAME = 'localization_toolkit'

FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """
    Paints each console line in the color of its level.

    With ``show_name`` the short module name (``xliff`` for
    ``localization_toolkit.xliff``) is put in front of the message.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.INFO: Colors.OKGREEN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True, show_name: bool = False):
        super().__init__(fmt)
        self.use_colors = use_colors
        self.show_name = show_name

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        prefix = ROOT_LOGGER_NAME + '.'
        if self.show_name and record.name.startswith(prefix):
            message = f"[{record.name[len(prefix):]}] {message}"

        if self.use_colors:
            message = f"{self.LEVEL_COLORS.get(record.levelno, '')}{message}{Colors.ENDC}"

        return message


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


class Logger:
    """
    Process-wide owner of the ``localization_toolkit`` logger.

    The CLI talks to this wrapper for its user-facing messages. Library
    modules log through ``logging.getLogger('localization_toolkit.<x>')``
    and reach the same handlers by propagation.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._console_handler = self._create_console_handler()
        self._logger.addHandler(self._console_handler)
        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    def _create_console_handler(
        self,
        level: int = logging.INFO,
        use_colors: bool = True,
        show_name: bool = False
    ) -> logging.StreamHandler:
        """
        Build the stderr handler.

        Reports printed on stdout (JSON in particular) must never be
        interleaved with log lines.
        """
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter('%(message)s', use_colors=use_colors, show_name=show_name))
        return handler

    def _create_file_handler(self, file_path: Path, level: int = logging.DEBUG) -> logging.FileHandler:
        """Build a plain-text handler appending to ``file_path``, creating its directory."""
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Apply the command line logging options.

        Args:
            verbose: Show DEBUG messages, prefixed with their module name
            quiet: Show warnings and errors only; wins over ``verbose``
            log_file: Also write everything at DEBUG and above to this file
            use_colors: Color the console output
        """
        self._logger.removeHandler(self._console_handler)
        self._console_handler = self._create_console_handler(
            level=_console_level(verbose, quiet),
            use_colors=use_colors,
            show_name=verbose
        )
        self._logger.addHandler(self._console_handler)

        if not log_file:
            return
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
        self._file_handler = self._create_file_handler(log_file)
        self._logger.addHandler(self._file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Return the package logger, or its ``name`` child."""
        if name:
            return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        return self._logger

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def success(self, msg: str) -> None:
        """Report a finished step with a green check mark."""
        self._logger.info(f"{Colors.success('✓')} {msg}")

    def fail(self, msg: str) -> None:
        """Report a failed step with a red cross."""
        self._logger.error(f"{Colors.error('✗')} {msg}")


_logger: Optional[Logger] = None


def get_logger(name: Optional[str] = None):
    """
    Return the shared ``Logger`` wrapper.

    With a ``name`` the plain ``logging.Logger`` child for that module
    is returned instead.
    """
    global _logger
    if _logger is None:
        _logger = Logger()
    if name:
        return _logger.get_logger(name)
    return _logger


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """Configure the shared logger; see ``Logger.configure``."""
    get_logger().configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Drop the shared logger and close its handlers (used by tests)."""
    global _logger
    if _logger is not None:
        for handler in _logger._logger.handlers[:]:
            handler.close()
            _logger._logger.removeHandler(handler)
    _logger = None
    Logger._instance = None
    Logger._initialized = False
