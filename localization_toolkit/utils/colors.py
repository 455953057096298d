"""ANSI color codes for terminal output."""

import re


class Colors:
    """ANSI color codes and helpers for lint output."""

    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

    # <e0>...</e0> style markers used in diagnostic highlights
    HIGHLIGHT_OPEN = re.compile(r'<e\d+>')
    HIGHLIGHT_CLOSE = re.compile(r'</e\d+>')

    @classmethod
    def success(cls, text: str) -> str:
        """Return text in green color."""
        return f"{cls.OKGREEN}{text}{cls.ENDC}"

    @classmethod
    def error(cls, text: str) -> str:
        """Return text in red color."""
        return f"{cls.FAIL}{text}{cls.ENDC}"

    @classmethod
    def warning(cls, text: str) -> str:
        """Return text in yellow color."""
        return f"{cls.WARNING}{text}{cls.ENDC}"

    @classmethod
    def info(cls, text: str) -> str:
        """Return text in cyan color."""
        return f"{cls.OKCYAN}{text}{cls.ENDC}"

    @classmethod
    def bold(cls, text: str) -> str:
        """Return text in bold."""
        return f"{cls.BOLD}{text}{cls.ENDC}"

    @classmethod
    def severity(cls, severity: str, text: str) -> str:
        """Color text according to a diagnostic severity."""
        if severity == 'error':
            return cls.error(text)
        if severity == 'warning':
            return cls.warning(text)
        return cls.info(text)

    @classmethod
    def highlight(cls, text: str, use_colors: bool = True) -> str:
        """
        Replace highlight markers with ANSI codes.

        Args:
            text: Highlight string containing <eN></eN> markers
            use_colors: When False the markers are simply removed

        Returns:
            Text ready for the terminal
        """
        if use_colors:
            text = cls.HIGHLIGHT_OPEN.sub(cls.FAIL + cls.UNDERLINE, text)
            return cls.HIGHLIGHT_CLOSE.sub(cls.ENDC, text)
        text = cls.HIGHLIGHT_OPEN.sub('', text)
        return cls.HIGHLIGHT_CLOSE.sub('', text)
