"""Abstract interface for audio segmentation."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from domain.models import AudioMetadata, Segment

ProgressObserver = Callable[[float], None]


class AudioSegmenter(ABC):
    """Abstract base class for probing and splitting audio files."""

    @abstractmethod
    async def probe(self, path: Path) -> AudioMetadata:
        """
        Validates that ``path`` is a decodable media container.

        Raises:
            ProbeError: If the file cannot be parsed.
        """

    @abstractmethod
    async def split(
        self,
        path: Path,
        output_dir: Path,
        segment_duration_seconds: int = 300,
        on_progress: ProgressObserver | None = None,
    ) -> list[Segment]:
        """
        Splits an audio file into independently decodable fixed-duration segments.

        Args:
            path: Source audio file.
            output_dir: Existing directory that receives the segment files.
            segment_duration_seconds: Length of each segment.
            on_progress: Optional observer receiving completion percentages.

        Returns:
            Segments in ascending index order.

        Raises:
            SplitError: If probing, encoding or listing the output fails,
                or no segment was produced.
        """
