"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .ffmpeg_segmenter import FfmpegSegmenter
from .http_fetcher import HttpAssetFetcher
from .openai_transcriber import OpenAITranscriber
from .scratch_store import ScratchStore
from .slack_messenger import SlackMessenger

__all__ = [
    "AssemblyAITranscriber",
    "FfmpegSegmenter",
    "HttpAssetFetcher",
    "OpenAITranscriber",
    "ScratchStore",
    "SlackMessenger",
]
