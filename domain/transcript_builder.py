"""Core business logic for transcript building."""


class TranscriptBuilder:
    """Assembles transcript fragments and formats the reply that carries them."""

    def segment_fragment(self, text: str) -> str:
        """Normalizes one segment's text and appends the separating space."""
        return text.strip() + " "

    def build(self, fragments: list[str]) -> str:
        """
        Concatenates fragments in the order they were produced.

        Args:
            fragments: Transcribed text, one entry per transcription unit.
                Segment fragments already carry their trailing separator.

        Returns:
            The full transcript.
        """
        return "".join(fragments)

    def format_reply(self, file_name: str, transcript: str) -> str:
        """Formats the chat message that delivers a finished transcript."""
        return f"Transcription result ({file_name}):\n{transcript}"
