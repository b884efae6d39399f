"""Shared fixtures for the transcription bot tests."""

import pytest

from domain import SourceAsset, TranscriptBuilder
from handlers import AudioFileHandler
from infrastructure import ScratchStore

from tests.fakes import FakeSegmenter, FakeTranscriber, make_file


@pytest.fixture
def asset() -> SourceAsset:
    return SourceAsset.from_file(make_file())


@pytest.fixture
def scratch_store(tmp_path) -> ScratchStore:
    return ScratchStore(tmp_path)


@pytest.fixture
def make_handler(scratch_store):
    def _make(fetcher, segmenter=None, transcriber=None, **kwargs):
        return AudioFileHandler(
            fetcher,
            segmenter or FakeSegmenter(),
            transcriber or FakeTranscriber(),
            scratch_store,
            TranscriptBuilder(),
            **kwargs,
        )

    return _make
