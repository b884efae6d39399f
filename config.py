"""Application configuration loaded from environment variables."""

import os
import tempfile
from typing import Literal

from pydantic import BaseModel

from exceptions import ConfigurationError


class SlackConfig(BaseModel, frozen=True):
    """Slack app credentials."""

    bot_token: str
    signing_secret: str
    app_token: str


class OpenAIConfig(BaseModel, frozen=True):
    """OpenAI transcription API configuration."""

    api_key: str
    model: str = "whisper-1"
    timeout_seconds: float = 600.0


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str


class PipelineConfig(BaseModel, frozen=True):
    """Download, segmentation and size-limit settings for one pipeline run."""

    scratch_root: str = tempfile.gettempdir()
    # 25 MB, the upload limit of the transcription API
    max_direct_upload_bytes: int = 26_214_400
    segment_duration_seconds: int = 300
    segment_codec: str = "libmp3lame"
    segment_bitrate: str = "128k"
    segment_extension: str = "mp3"
    segment_index_digits: int = 3
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    download_timeout_seconds: float = 60.0
    download_chunk_size: int = 1024 * 1024


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    slack: SlackConfig
    openai: OpenAIConfig
    assemblyai: AssemblyAIConfig
    pipeline: PipelineConfig = PipelineConfig()
    transcription_backend: Literal["openai", "assemblyai"] = "openai"


def _required_variables(backend: str) -> list[str]:
    names = ["SLACK_BOT_TOKEN", "SLACK_SIGNING_SECRET", "SLACK_APP_TOKEN"]
    if backend == "assemblyai":
        names.append("ASSEMBLYAI_API_KEY")
    else:
        names.append("OPENAI_API_KEY")
    return names


def load_config() -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        ConfigurationError: If any credential required by the selected
            transcription backend is missing.
    """
    backend = os.getenv("TRANSCRIPTION_BACKEND", "openai")
    missing = [name for name in _required_variables(backend) if not os.getenv(name)]
    if missing:
        raise ConfigurationError(missing)

    pipeline_defaults = PipelineConfig()
    return AppConfig(
        slack=SlackConfig(
            bot_token=os.getenv("SLACK_BOT_TOKEN", ""),
            signing_secret=os.getenv("SLACK_SIGNING_SECRET", ""),
            app_token=os.getenv("SLACK_APP_TOKEN", ""),
        ),
        openai=OpenAIConfig(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            model=os.getenv("OPENAI_TRANSCRIPTION_MODEL", "whisper-1"),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        pipeline=PipelineConfig(
            scratch_root=os.getenv("SCRATCH_ROOT", pipeline_defaults.scratch_root),
            segment_duration_seconds=int(
                os.getenv(
                    "SEGMENT_DURATION_SECONDS",
                    pipeline_defaults.segment_duration_seconds,
                )
            ),
            ffmpeg_path=os.getenv("FFMPEG_PATH", pipeline_defaults.ffmpeg_path),
            ffprobe_path=os.getenv("FFPROBE_PATH", pipeline_defaults.ffprobe_path),
            segment_index_digits=int(
                os.getenv(
                    "SEGMENT_INDEX_DIGITS", pipeline_defaults.segment_index_digits
                )
            ),
        ),
        transcription_backend=backend,
    )
