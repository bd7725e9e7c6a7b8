"""
Request-level error kinds for PDF field extraction.

Only I/O failures surface as errors. Malformed field dumps and page text
degrade to fewer fields or absent labels instead.
"""


class FieldExtractionError(Exception):
    """Base class for extraction failures that end a request."""


class ToolUnavailable(FieldExtractionError):
    """The pdftk executable could not be found or started."""

    def __init__(self, command: str = 'pdftk'):
        self.command = command
        super().__init__(
            f"{command} is not installed. Please install pdftk to use this tool."
        )


class ExtractionFailed(FieldExtractionError):
    """pdftk ran but failed, or the input file could not be read."""


class TextExtractionFailed(FieldExtractionError):
    """Page text could not be extracted. Recovered by the pipeline."""
