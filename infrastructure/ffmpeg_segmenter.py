"""ffmpeg implementation of the AudioSegmenter interface."""

import asyncio
import contextlib
import json
import os
from pathlib import Path

from domain.models import SEGMENT_PREFIX, AudioMetadata, Segment
from exceptions import ProbeError, SplitError
from structured_logging import setup_logging

from .interfaces import AudioSegmenter, ProgressObserver

logger = setup_logging()

# ffmpeg reports this value in microseconds despite its name
_PROGRESS_TIME_KEY = "out_time_ms"


class FfmpegSegmenter(AudioSegmenter):
    """Probes audio with ffprobe and cuts it into re-encoded chunks with ffmpeg."""

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        ffprobe_path: str = "ffprobe",
        codec: str = "libmp3lame",
        bitrate: str = "128k",
        extension: str = "mp3",
        index_digits: int = 3,
    ):
        self._ffmpeg_path = ffmpeg_path
        self._ffprobe_path = ffprobe_path
        self._codec = codec
        self._bitrate = bitrate
        self._extension = extension
        self._index_digits = index_digits

    async def probe(self, path: Path) -> AudioMetadata:
        """
        Reads container and stream details with ffprobe.

        Raises:
            ProbeError: If ffprobe is missing, rejects the file, or finds no audio stream.
        """
        cmd = [
            self._ffprobe_path,
            "-v",
            "error",
            "-show_entries",
            "format=format_name,duration:stream=codec_type,codec_name",
            "-of",
            "json",
            str(path),
        ]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            logger.exception("ffprobe could not be started", extra={"file": path.name})
            raise ProbeError(path.name, cause=e) from e

        diagnostics = stderr.decode(errors="replace").strip()
        if proc.returncode != 0:
            logger.error(
                "ffprobe rejected file",
                extra={"file": path.name, "stderr": diagnostics},
            )
            raise ProbeError(path.name, diagnostics)

        try:
            report = json.loads(stdout or b"{}")
        except ValueError as e:
            raise ProbeError(path.name, diagnostics, e) from e

        container = report.get("format", {})
        audio_codecs = [
            stream.get("codec_name", "")
            for stream in report.get("streams", [])
            if stream.get("codec_type") == "audio"
        ]
        if not audio_codecs:
            raise ProbeError(path.name, "No audio stream found")

        duration = container.get("duration")
        metadata = AudioMetadata(
            format_name=container.get("format_name", ""),
            duration_seconds=float(duration) if duration not in (None, "N/A") else None,
            audio_codecs=audio_codecs,
        )
        logger.info(
            "Audio file probed",
            extra={"file": path.name, "format": metadata.format_name},
        )
        return metadata

    async def split(
        self,
        path: Path,
        output_dir: Path,
        segment_duration_seconds: int = 300,
        on_progress: ProgressObserver | None = None,
    ) -> list[Segment]:
        """
        Re-encodes ``path`` into fixed-duration segment files inside ``output_dir``.

        The result is built from a sorted listing of ``output_dir`` once ffmpeg
        exits; ffmpeg's own reporting order is never relied upon.
        """
        metadata = await self.probe(path)

        cmd = self._split_command(path, output_dir, segment_duration_seconds)
        logger.info("Starting ffmpeg", extra={"command": " ".join(cmd)})
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.exception("ffmpeg could not be started", extra={"file": path.name})
            raise SplitError(path.name, cause=e) from e

        stderr_task = asyncio.create_task(proc.stderr.read())
        try:
            async for raw_line in proc.stdout:
                percent = self._progress_percent(raw_line, metadata.duration_seconds)
                if percent is not None:
                    logger.debug("Splitting progress", extra={"percent": percent})
                    if on_progress is not None:
                        on_progress(percent)
            stderr = await stderr_task
            returncode = await proc.wait()
        finally:
            # Interrupted before ffmpeg exited: it must not outlive the scratch directory
            if proc.returncode is None:
                logger.warning("Stopping ffmpeg", extra={"file": path.name, "pid": proc.pid})
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
            if not stderr_task.done():
                stderr_task.cancel()
                await asyncio.gather(stderr_task, return_exceptions=True)

        if returncode != 0:
            diagnostics = stderr.decode(errors="replace").strip()
            logger.error(
                "ffmpeg failed",
                extra={"file": path.name, "returncode": returncode, "stderr": diagnostics},
            )
            raise SplitError(path.name, diagnostics)

        segments = self._list_segments(path, output_dir)
        logger.info(
            "Audio file split",
            extra={"file": path.name, "segment_count": len(segments)},
        )
        return segments

    def _split_command(
        self, path: Path, output_dir: Path, segment_duration_seconds: int
    ) -> list[str]:
        pattern = output_dir / (
            f"{SEGMENT_PREFIX}%0{self._index_digits}d.{self._extension}"
        )
        return [
            self._ffmpeg_path,
            "-hide_banner",
            "-nostats",
            "-y",
            "-i",
            str(path),
            "-f",
            "segment",
            "-segment_time",
            str(segment_duration_seconds),
            "-reset_timestamps",
            "1",
            "-map",
            "0:a",
            "-c:a",
            self._codec,
            "-b:a",
            self._bitrate,
            "-progress",
            "pipe:1",
            str(pattern),
        ]

    def _list_segments(self, path: Path, output_dir: Path) -> list[Segment]:
        try:
            names = sorted(
                name for name in os.listdir(output_dir) if name.startswith(SEGMENT_PREFIX)
            )
        except OSError as e:
            logger.exception(
                "Failed to read segment directory", extra={"directory": str(output_dir)}
            )
            raise SplitError(path.name, cause=e) from e

        if not names:
            raise SplitError(path.name, "ffmpeg produced no segments")

        segments = []
        for name in names:
            try:
                segment = Segment.from_path(output_dir / name)
            except ValueError as e:
                raise SplitError(path.name, str(e), e) from e
            # Wider indices no longer sort lexicographically in time order
            if segment.index >= 10**self._index_digits:
                raise SplitError(
                    path.name,
                    f"Segment count exceeds {10**self._index_digits} "
                    f"({self._index_digits}-digit index)",
                )
            segments.append(segment)
        return segments

    @staticmethod
    def _progress_percent(raw_line: bytes, duration_seconds: float | None) -> float | None:
        """Converts one ``key=value`` line of ffmpeg progress output to a percentage."""
        if not duration_seconds:
            return None
        key, _, value = raw_line.decode(errors="replace").strip().partition("=")
        if key != _PROGRESS_TIME_KEY:
            return None
        try:
            elapsed_us = int(value)
        except ValueError:
            return None
        return min(100.0, elapsed_us / (duration_seconds * 1_000_000) * 100)
