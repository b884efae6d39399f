"""HTTP implementation of the AssetFetcher interface."""

import asyncio
import threading
from pathlib import Path

import requests

from exceptions import FetchError
from structured_logging import setup_logging

from .interfaces import AssetFetcher

logger = setup_logging()


class HttpAssetFetcher(AssetFetcher):
    """Downloads private chat attachments with bearer-token authorization."""

    def __init__(
        self,
        session: requests.Session,
        token: str,
        timeout_seconds: float = 60.0,
        chunk_size: int = 1024 * 1024,
    ):
        self._session = session
        self._token = token
        self._timeout_seconds = timeout_seconds
        self._chunk_size = chunk_size

    async def fetch(self, url: str, destination: Path) -> int:
        """
        Runs the blocking streamed download in a worker thread.

        The thread cannot be interrupted. When the awaiting task is cancelled,
        the download stops at the next chunk boundary; until then it may still
        write into ``destination``, even after the run's scratch files are released.
        """
        cancelled = threading.Event()
        try:
            return await asyncio.to_thread(self._download, url, destination, cancelled)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    def _download(self, url: str, destination: Path, cancelled: threading.Event) -> int:
        try:
            with self._session.get(
                url,
                headers={"Authorization": f"Bearer {self._token}"},
                stream=True,
                timeout=self._timeout_seconds,
            ) as response:
                response.raise_for_status()
                # Slack answers an unauthorized file request with its HTML login page
                if response.headers.get("Content-Type", "").startswith("text/html"):
                    raise FetchError(url, Exception("Received an HTML page instead of a file"))

                written = 0
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self._chunk_size):
                        if cancelled.is_set():
                            raise FetchError(url, Exception("Download cancelled"))
                        f.write(chunk)
                        written += len(chunk)
        except FetchError:
            logger.exception("File download rejected", extra={"destination": str(destination)})
            raise
        except (requests.RequestException, OSError) as e:
            logger.exception("File download failed", extra={"destination": str(destination)})
            raise FetchError(url, e) from e

        logger.info(
            "File downloaded",
            extra={"destination": str(destination), "size_bytes": written},
        )
        return written
