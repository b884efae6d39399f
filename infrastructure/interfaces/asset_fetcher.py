"""Abstract interface for remote asset retrieval."""

from abc import ABC, abstractmethod
from pathlib import Path


class AssetFetcher(ABC):
    """Abstract base class for downloading remote files to local storage."""

    @abstractmethod
    async def fetch(self, url: str, destination: Path) -> int:
        """
        Streams the remote content at ``url`` into ``destination``.

        Args:
            url: Location of the remote file.
            destination: Local path to create or overwrite.

        Returns:
            Number of bytes written.

        Raises:
            FetchError: On transport failure, non-success status or write failure.
                A partially written file is left for the caller to remove.
        """
