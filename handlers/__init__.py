"""Handler layer exports."""

from .audio_file_handler import AudioFileHandler

__all__ = ["AudioFileHandler"]
