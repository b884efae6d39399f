"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
from pathlib import Path

import assemblyai as aai

from exceptions import TranscriptionError
from structured_logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    async def transcribe(self, path: Path) -> str:
        """
        Transcribes an audio file using AssemblyAI.

        The SDK call blocks while it uploads and polls, so it runs in a worker
        thread to keep the event loop responsive.
        """
        try:
            transcription = await asyncio.to_thread(self._transcriber.transcribe, str(path))
        except Exception as e:
            logger.exception("AssemblyAI transcription failed", extra={"file": path.name})
            raise TranscriptionError(path.name, e) from e

        if transcription.status == aai.TranscriptStatus.error:
            raise TranscriptionError(path.name, Exception(transcription.error))

        if transcription.text is None:
            raise TranscriptionError(
                path.name,
                Exception("Transcription returned no text"),
            )

        logger.info(
            "Audio transcription successful",
            extra={"file": path.name, "characters": len(transcription.text)},
        )
        return transcription.text
