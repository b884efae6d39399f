"""Handler that turns one remote audio file into a transcript."""

from collections.abc import Iterator
from contextlib import contextmanager

from domain import (
    ScratchWorkspace,
    SourceAsset,
    Stage,
    TranscriptBuilder,
    TranscriptResult,
)
from exceptions import PipelineError, SplitError
from infrastructure import ScratchStore
from infrastructure.interfaces import AssetFetcher, AudioSegmenter, TranscriptionService
from structured_logging import setup_logging

logger = setup_logging()


@contextmanager
def pipeline_stage(stage: Stage, asset_id: str) -> Iterator[None]:
    """Tags any failure raised inside the block with the stage it happened in."""
    logger.info("Pipeline stage started", extra={"stage": stage.value, "asset_id": asset_id})
    try:
        yield
    except PipelineError:
        raise
    except Exception as e:
        logger.exception(
            "Pipeline stage failed", extra={"stage": stage.value, "asset_id": asset_id}
        )
        raise PipelineError(stage, asset_id, e) from e


class AudioFileHandler:
    """Orchestrates download, optional splitting and transcription of one audio file."""

    def __init__(
        self,
        fetcher: AssetFetcher,
        segmenter: AudioSegmenter,
        transcription_service: TranscriptionService,
        scratch_store: ScratchStore,
        transcript_builder: TranscriptBuilder,
        max_direct_upload_bytes: int = 26_214_400,
        segment_duration_seconds: int = 300,
    ):
        self._fetcher = fetcher
        self._segmenter = segmenter
        self._transcription_service = transcription_service
        self._scratch_store = scratch_store
        self._transcript_builder = transcript_builder
        self._max_direct_upload_bytes = max_direct_upload_bytes
        self._segment_duration_seconds = segment_duration_seconds

    async def process(self, asset: SourceAsset) -> TranscriptResult:
        """
        Downloads and transcribes an audio file, splitting it when it is too
        large for a single transcription request.

        Scratch files are removed on every exit path before this returns or raises.

        Args:
            asset: The audio file to transcribe.

        Returns:
            TranscriptResult with the full transcript.

        Raises:
            PipelineError: Tagged with the failed stage; ``cause`` holds the
                FetchError, SplitError or TranscriptionError raised there.
        """
        logger.info(
            "Processing audio file",
            extra={"asset_id": asset.id, "mimetype": asset.mimetype},
        )

        with self._scratch_store.workspace(asset) as workspace:
            with pipeline_stage(Stage.FETCHING, asset.id):
                await self._fetcher.fetch(asset.url, workspace.file_path)

            with pipeline_stage(Stage.SIZE_CHECK, asset.id):
                asset = asset.with_size(workspace.file_path.stat().st_size)

            if asset.size_bytes > self._max_direct_upload_bytes:
                logger.info(
                    "File exceeds upload limit, splitting",
                    extra={"asset_id": asset.id, "size_bytes": asset.size_bytes},
                )
                fragments = await self._transcribe_segments(asset, workspace)
            else:
                with pipeline_stage(Stage.DIRECT_TRANSCRIBE, asset.id):
                    fragments = [
                        await self._transcription_service.transcribe(workspace.file_path)
                    ]

            with pipeline_stage(Stage.AGGREGATING, asset.id):
                text = self._transcript_builder.build(fragments)

        logger.info(
            "Audio file transcribed",
            extra={"asset_id": asset.id, "unit_count": len(fragments)},
        )
        return TranscriptResult(
            asset_id=asset.id,
            asset_name=asset.name,
            fragments=fragments,
            text=text,
        )

    async def _transcribe_segments(
        self, asset: SourceAsset, workspace: ScratchWorkspace
    ) -> list[str]:
        with pipeline_stage(Stage.SPLITTING, asset.id):
            output_dir = self._scratch_store.create_segment_dir(workspace)
            segments = await self._segmenter.split(
                workspace.file_path, output_dir, self._segment_duration_seconds
            )
            if not segments:
                raise SplitError(asset.name, "No segments produced")
            logger.info(
                "File split into segments",
                extra={"asset_id": asset.id, "segment_count": len(segments)},
            )

        fragments = []
        with pipeline_stage(Stage.SEGMENT_LOOP, asset.id):
            for segment in sorted(segments, key=lambda s: s.index):
                text = await self._transcription_service.transcribe(segment.path)
                fragments.append(self._transcript_builder.segment_fragment(text))
                logger.info(
                    "Segment transcribed",
                    extra={"asset_id": asset.id, "segment": segment.name},
                )
        return fragments
