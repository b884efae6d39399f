"""Infrastructure interface exports."""

from .asset_fetcher import AssetFetcher
from .message_sink import MessageSink
from .segmenter import AudioSegmenter, ProgressObserver
from .transcription_service import TranscriptionService

__all__ = [
    "AssetFetcher",
    "AudioSegmenter",
    "MessageSink",
    "ProgressObserver",
    "TranscriptionService",
]
