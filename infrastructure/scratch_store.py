"""Temporary file management for pipeline runs."""

import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from domain.models import ScratchWorkspace, SourceAsset
from exceptions import CleanupError
from structured_logging import setup_logging

logger = setup_logging()

SEGMENT_DIR_SUFFIX = "_segments"


class ScratchStore:
    """Allocates per-asset scratch paths and removes them when a run ends."""

    def __init__(self, root: Path):
        self._root = root

    def acquire(self, asset: SourceAsset) -> ScratchWorkspace:
        """
        Derives the scratch paths for one run from the asset id.

        Nothing is created on disk: the fetcher creates the file and the
        segment directory is only created once splitting is chosen.
        """
        file_name = f"{asset.id}.{asset.extension}" if asset.extension else asset.id
        return ScratchWorkspace(
            asset_id=asset.id,
            file_path=self._root / file_name,
            segment_dir=self._root / f"{asset.id}{SEGMENT_DIR_SUFFIX}",
        )

    def create_segment_dir(self, workspace: ScratchWorkspace) -> Path:
        workspace.segment_dir.mkdir(parents=True, exist_ok=True)
        return workspace.segment_dir

    def release(self, workspace: ScratchWorkspace) -> list[CleanupError]:
        """
        Removes the scratch file and segment directory, whichever exist.

        Removal failures are logged and returned, never raised.
        """
        errors = []
        if workspace.file_path.exists():
            try:
                os.remove(workspace.file_path)
            except OSError as e:
                errors.append(CleanupError(str(workspace.file_path), e))
        if workspace.segment_dir.exists():
            try:
                shutil.rmtree(workspace.segment_dir)
            except OSError as e:
                errors.append(CleanupError(str(workspace.segment_dir), e))

        for error in errors:
            logger.warning(
                str(error),
                extra={"asset_id": workspace.asset_id, "error": str(error.cause)},
            )
        if not errors:
            logger.info("Scratch space released", extra={"asset_id": workspace.asset_id})
        return errors

    @contextmanager
    def workspace(self, asset: SourceAsset) -> Iterator[ScratchWorkspace]:
        """Yields a workspace and releases it on every exit path."""
        workspace = self.acquire(asset)
        try:
            yield workspace
        finally:
            self.release(workspace)
