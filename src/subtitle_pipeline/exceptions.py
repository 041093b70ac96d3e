"""Error taxonomy for the subtitle pipeline.

Every error carries the HTTP status its request handler responds with.
"""


class SubtitlePipelineError(Exception):
    """Base class for all pipeline errors."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(SubtitlePipelineError):
    """A request field is missing or malformed."""

    status_code = 400


class ConfigurationError(SubtitlePipelineError):
    """Required configuration values are missing."""

    status_code = 500

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing environment variables: {', '.join(self.missing)}")


class InvalidSettingError(ConfigurationError):
    """A configuration value is set but cannot be used."""

    def __init__(self, name: str, value: str, expected: str):
        self.missing = []
        self.name = name
        self.value = value
        SubtitlePipelineError.__init__(
            self, f"Invalid value for {name}: '{value}' (expected {expected})"
        )


class CapabilityError(SubtitlePipelineError):
    """The storage backend refused or failed an operation."""

    status_code = 502


class RetrievalError(CapabilityError):
    """The stored media object is missing, unreadable or empty."""


class ModelInvocationError(SubtitlePipelineError):
    """The transcription model failed or returned non-conforming output."""

    status_code = 502


class TransferError(SubtitlePipelineError):
    """The direct client-to-storage upload failed."""


class InvalidStateError(SubtitlePipelineError):
    """A driver operation was requested from a state that does not allow it."""
