"""Domain models for the audio transcription bot."""

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from structured_logging import setup_logging

logger = setup_logging()

SEGMENT_PREFIX = "segment_"

_SEGMENT_NAME = re.compile(rf"^{SEGMENT_PREFIX}(\d+)\.")


class FileDescriptor(BaseModel, frozen=True):
    """A file attached to an inbound chat message."""

    id: str
    name: str
    url: str = Field(alias="url_private")
    mimetype: str = ""
    filetype: str = ""

    @property
    def is_audio(self) -> bool:
        return self.mimetype.startswith("audio/")


class MentionEvent(BaseModel, frozen=True):
    """Represents an incoming mention of the bot, with any attached files."""

    channel: str
    ts: str | None = None
    thread_ts: str | None = None
    files: list[FileDescriptor] = []
    skipped_file_ids: list[str] = []

    @model_validator(mode="before")
    @classmethod
    def _skip_unreadable_files(cls, data: Any) -> Any:
        """
        Parses attachments one at a time, keeping the ones that validate.

        Hidden or access-restricted files arrive without a name or download URL;
        they are recorded in ``skipped_file_ids`` instead of failing the event.
        """
        if not isinstance(data, dict) or not isinstance(data.get("files"), list):
            return data

        files, skipped = [], []
        for entry in data["files"]:
            try:
                files.append(FileDescriptor.model_validate(entry))
            except ValidationError as e:
                file_id = entry.get("id") if isinstance(entry, dict) else None
                logger.warning(
                    "Skipping unreadable file descriptor",
                    extra={"file_id": file_id, "error": str(e)},
                )
                skipped.append(str(file_id))
        return {**data, "files": files, "skipped_file_ids": skipped}

    @property
    def has_attachments(self) -> bool:
        return bool(self.files or self.skipped_file_ids)

    @property
    def audio_files(self) -> list[FileDescriptor]:
        return [file for file in self.files if file.is_audio]


class SourceAsset(BaseModel, frozen=True):
    """The audio file one pipeline run transcribes."""

    id: str
    name: str
    url: str
    mimetype: str
    extension: str
    size_bytes: int | None = None

    @classmethod
    def from_file(cls, file: FileDescriptor) -> "SourceAsset":
        return cls(
            id=file.id,
            name=file.name,
            url=file.url,
            mimetype=file.mimetype,
            extension=file.filetype,
        )

    def with_size(self, size_bytes: int) -> "SourceAsset":
        return self.model_copy(update={"size_bytes": size_bytes})


class ScratchWorkspace(BaseModel, frozen=True):
    """On-disk working area owned by a single pipeline run."""

    asset_id: str
    file_path: Path
    segment_dir: Path


class Segment(BaseModel, frozen=True):
    """One fixed-duration slice of a source asset, ordered by its filename index."""

    index: int
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_path(cls, path: Path) -> "Segment":
        """Parses the zero-padded index out of a ``segment_NNN.ext`` filename."""
        match = _SEGMENT_NAME.match(path.name)
        if match is None:
            raise ValueError(f"Not a segment file name: '{path.name}'")
        return cls(index=int(match.group(1)), path=path)


class AudioMetadata(BaseModel, frozen=True):
    """Container details reported by the media probe."""

    format_name: str
    duration_seconds: float | None = None
    audio_codecs: list[str] = []


class Stage(str, Enum):
    """Pipeline stages, used to tag failures."""

    FETCHING = "fetching"
    SIZE_CHECK = "size_check"
    DIRECT_TRANSCRIBE = "direct_transcribe"
    SPLITTING = "splitting"
    SEGMENT_LOOP = "segment_loop"
    AGGREGATING = "aggregating"

    def __str__(self) -> str:
        return self.value


class TranscriptResult(BaseModel, frozen=True):
    """Result of a transcription pipeline run."""

    asset_id: str
    asset_name: str
    fragments: list[str]
    text: str

    @property
    def unit_count(self) -> int:
        return len(self.fragments)
