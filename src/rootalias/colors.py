#!/usr/bin/env python3
"""Terminal color utilities for rootalias output.

Provides ANSI color support with automatic detection of terminal capabilities.
Respects the NO_COLOR environment variable (https://no-color.org/).

Example:
    >>> from rootalias.colors import get_colors
    >>> c = get_colors()
    >>> print(c.green("/my/project/src/app.js"))
"""

import os
import sys


class Colors:
    """ANSI color helper for resolver output.

    Attributes:
        enabled: Whether colors are enabled (auto-detected or manually set).
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"

    def __init__(self, enabled: bool = None):
        if enabled is not None:
            self.enabled = enabled
        else:
            self.enabled = self._should_enable_colors()

    def _should_enable_colors(self) -> bool:
        """Determine if colors should be enabled based on environment."""
        if os.environ.get("NO_COLOR"):
            return False

        if os.environ.get("FORCE_COLOR"):
            return True

        if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
            return False

        return os.environ.get("TERM", "") != "dumb"

    def _colorize(self, text: str, color: str) -> str:
        if not self.enabled:
            return text
        return f"{color}{text}{self.RESET}"

    def green(self, text: str) -> str:
        """Green text (resolved paths)."""
        return self._colorize(text, self.GREEN)

    def yellow(self, text: str) -> str:
        """Yellow text (builtins, notices)."""
        return self._colorize(text, self.YELLOW)

    def cyan(self, text: str) -> str:
        """Cyan text (config files, directories)."""
        return self._colorize(text, self.CYAN)

    def dim(self, text: str) -> str:
        """Dim text (labels)."""
        return self._colorize(text, self.DIM)

    def error(self, text: str) -> str:
        """Error message (bold red)."""
        if not self.enabled:
            return text
        return f"{self.BOLD}{self.RED}{text}{self.RESET}"


def get_colors(no_color: bool = False) -> Colors:
    """Get a Colors instance, optionally disabling colors."""
    if no_color:
        return Colors(enabled=False)
    return Colors()
