"""
Text normalization for markup text runs.

Collapses whitespace the way flowed text is laid out and strips the leading
whitespace of lines when a block has just started.
"""

import re
from typing import Union


class TextNormalizer:
    """Normalizes text content before it is handed to the canvas."""

    # Runs of newlines and other whitespace collapse to a single space
    WHITESPACE_PATTERN = re.compile(r"[\n\s]+")

    # Leading whitespace at the start of every line
    LEADING_WHITESPACE_PATTERN = re.compile(r"^\s+", re.MULTILINE)

    def __init__(self, preserve_whitespace: bool = False):
        """Initialize text normalizer.

        Args:
            preserve_whitespace: If True, keep preformatted whitespace as-is.
                                If False, collapse whitespace runs to single spaces.
        """
        self.preserve_whitespace = preserve_whitespace

    def normalize_text(self, text: str, trim: bool = False) -> str:
        """Normalize a text run, optionally stripping leading whitespace of each line."""
        if not text:
            return text

        normalized = text
        if not self.preserve_whitespace:
            normalized = self._collapse_whitespace(normalized)
        if trim:
            normalized = self._strip_line_starts(normalized)
        return normalized

    def _collapse_whitespace(self, text: str) -> str:
        return self.WHITESPACE_PATTERN.sub(" ", text)

    def _strip_line_starts(self, text: str) -> str:
        return self.LEADING_WHITESPACE_PATTERN.sub("", text)


def normalize_run_text(text: Union[str, int, float, None],
                       preserve_whitespace: bool = False,
                       trim: bool = False) -> str:
    """Convenience function to normalize the content of a text run.

    Args:
        text: Text run content; numbers are converted to strings
        preserve_whitespace: Whether the run is preformatted
        trim: Whether leading whitespace of each line should be removed

    Returns:
        Normalized text string, empty for missing content
    """
    if text is None or isinstance(text, bool):
        return ""
    if isinstance(text, (int, float)):
        text = str(text)
    normalizer = TextNormalizer(preserve_whitespace=preserve_whitespace)
    return normalizer.normalize_text(text, trim=trim)
