"""Custom exceptions for the audio transcription bot."""


class ConfigurationError(Exception):
    """Raised when required environment variables are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}"
        )


class FetchError(Exception):
    """Raised when downloading a remote audio file fails."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to download '{url}'")


class SplitError(Exception):
    """Raised when the segmentation tool rejects a file or its output is unusable."""

    operation = "split"

    def __init__(
        self,
        file_name: str,
        diagnostics: str = "",
        cause: Exception | None = None,
    ):
        self.file_name = file_name
        self.diagnostics = diagnostics
        self.cause = cause
        super().__init__(f"Failed to {self.operation} audio file '{file_name}'")


class ProbeError(SplitError):
    """Raised when an audio file cannot be parsed as a media container."""

    operation = "probe"


class TranscriptionError(Exception):
    """Raised when audio transcription fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to transcribe audio file '{file_name}'")


class CleanupError(Exception):
    """Describes a scratch path that could not be removed. Logged, never raised."""

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to remove scratch path '{path}'")


class MessagePostError(Exception):
    """Raised when posting a message to the chat platform fails."""

    def __init__(self, channel: str, cause: Exception | None = None):
        self.channel = channel
        self.cause = cause
        super().__init__(f"Failed to post message to channel '{channel}'")


class PipelineError(Exception):
    """Raised when a pipeline stage fails; carries the stage and the original error."""

    def __init__(self, stage: str, asset_id: str, cause: Exception):
        self.stage = stage
        self.asset_id = asset_id
        self.cause = cause
        super().__init__(f"Pipeline failed at stage '{stage}' for file '{asset_id}'")
