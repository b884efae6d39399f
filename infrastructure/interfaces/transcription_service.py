"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path


class TranscriptionService(ABC):
    """Abstract base class for audio transcription backends."""

    @abstractmethod
    async def transcribe(self, path: Path) -> str:
        """
        Transcribes one audio file and returns its text.

        Args:
            path: Audio file small enough for a single request.

        Returns:
            The transcribed text.

        Raises:
            TranscriptionError: If transcription fails.
        """
