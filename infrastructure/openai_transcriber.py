"""OpenAI implementation of the TranscriptionService interface."""

from pathlib import Path

import openai

from exceptions import TranscriptionError
from structured_logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()


class OpenAITranscriber(TranscriptionService):
    """Handles audio transcription using the OpenAI audio API."""

    def __init__(self, client: openai.AsyncOpenAI, model: str = "whisper-1"):
        self._client = client
        self._model = model

    async def transcribe(self, path: Path) -> str:
        """
        Uploads one audio file and returns the transcribed text.

        Raises:
            TranscriptionError: If the file cannot be read or the API call fails.
        """
        try:
            with open(path, "rb") as audio_file:
                transcription = await self._client.audio.transcriptions.create(
                    file=audio_file,
                    model=self._model,
                )
        except (openai.OpenAIError, OSError) as e:
            logger.exception("OpenAI transcription failed", extra={"file": path.name})
            raise TranscriptionError(path.name, e) from e

        logger.info(
            "Audio transcription successful",
            extra={"file": path.name, "characters": len(transcription.text)},
        )
        return transcription.text
