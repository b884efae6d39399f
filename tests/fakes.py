"""In-memory stand-ins for the pipeline collaborators."""

from pathlib import Path

from domain import AudioMetadata, FileDescriptor, Segment
from exceptions import FetchError, SplitError, TranscriptionError
from infrastructure.interfaces import (
    AssetFetcher,
    AudioSegmenter,
    MessageSink,
    TranscriptionService,
)

MB = 1024 * 1024


class FakeFetcher(AssetFetcher):
    """Writes a sparse file of the requested size instead of downloading."""

    def __init__(self, size_bytes: int = 1024, fail: bool = False):
        self.size_bytes = size_bytes
        self.fail = fail
        self.calls: list[tuple[str, Path]] = []

    async def fetch(self, url: str, destination: Path) -> int:
        self.calls.append((url, destination))
        with open(destination, "wb") as f:
            if self.fail:
                f.write(b"partial")
            else:
                f.truncate(self.size_bytes)
        if self.fail:
            raise FetchError(url, ConnectionError("connection reset"))
        return self.size_bytes


class FakeSegmenter(AudioSegmenter):
    """Creates empty segment files, newest first, and returns them unordered."""

    def __init__(self, segment_count: int = 3, fail: bool = False):
        self.segment_count = segment_count
        self.fail = fail
        self.calls: list[tuple[Path, Path, int]] = []

    async def probe(self, path):
        return AudioMetadata(
            format_name="mov,mp4,m4a,3gp,3g2,mj2",
            duration_seconds=300.0 * self.segment_count,
            audio_codecs=["aac"],
        )

    async def split(self, path, output_dir, segment_duration_seconds=300, on_progress=None):
        self.calls.append((path, output_dir, segment_duration_seconds))
        await self.probe(path)
        if self.fail:
            raise SplitError(path.name, "Invalid data found when processing input")
        segments = []
        for index in reversed(range(self.segment_count)):
            segment_path = output_dir / f"segment_{index:03d}.mp3"
            segment_path.touch()
            segments.append(Segment(index=index, path=segment_path))
        return segments


class FakeTranscriber(TranscriptionService):
    """Returns canned text per file name and records the order of calls."""

    def __init__(self, texts: dict[str, str] | None = None, failing: set[str] | None = None):
        self.texts = texts or {}
        self.failing = failing or set()
        self.calls: list[str] = []

    async def transcribe(self, path: Path) -> str:
        self.calls.append(path.name)
        if path.name in self.failing:
            raise TranscriptionError(path.name, Exception("Invalid file format"))
        return self.texts.get(path.name, "hello world")


class RecordingMessenger(MessageSink):
    def __init__(self):
        self.messages: list[tuple[str, str, str | None]] = []

    async def post_message(self, channel, text, thread_ts=None):
        self.messages.append((channel, text, thread_ts))


def make_file(file_id="F123", name="meeting.m4a", mimetype="audio/x-m4a", filetype="m4a"):
    return FileDescriptor.model_validate(
        {
            "id": file_id,
            "name": name,
            "url_private": f"https://files.slack.com/files-pri/T1-{file_id}/{name}",
            "mimetype": mimetype,
            "filetype": filetype,
        }
    )
