"""Domain layer exports."""

from . import replies
from .models import (
    SEGMENT_PREFIX,
    AudioMetadata,
    FileDescriptor,
    MentionEvent,
    ScratchWorkspace,
    Segment,
    SourceAsset,
    Stage,
    TranscriptResult,
)
from .transcript_builder import TranscriptBuilder

__all__ = [
    "SEGMENT_PREFIX",
    "AudioMetadata",
    "FileDescriptor",
    "MentionEvent",
    "ScratchWorkspace",
    "Segment",
    "SourceAsset",
    "Stage",
    "TranscriptResult",
    "TranscriptBuilder",
    "replies",
]
