"""Dependency injection configuration for the transcription bot."""

from functools import cache
from pathlib import Path

import assemblyai as aai
import openai
import requests
from slack_bolt.async_app import AsyncApp

from config import AppConfig, load_config
from domain import TranscriptBuilder
from handlers import AudioFileHandler
from infrastructure import (
    AssemblyAITranscriber,
    FfmpegSegmenter,
    HttpAssetFetcher,
    OpenAITranscriber,
    ScratchStore,
    SlackMessenger,
)
from infrastructure.interfaces import MessageSink, TranscriptionService
from structured_logging import setup_logging
from worker import Worker

logger = setup_logging()


@cache
def get_config() -> AppConfig:
    """Returns the validated application configuration."""
    return load_config()


@cache
def get_slack_app() -> AsyncApp:
    """Returns the configured Slack app."""
    config = get_config()
    return AsyncApp(
        token=config.slack.bot_token,
        signing_secret=config.slack.signing_secret,
    )


@cache
def get_messenger() -> MessageSink:
    """Returns the configured chat message sink."""
    return SlackMessenger(get_slack_app().client)


@cache
def get_transcription_service() -> TranscriptionService:
    """Returns the transcription backend selected by configuration."""
    config = get_config()
    if config.transcription_backend == "assemblyai":
        aai.settings.api_key = config.assemblyai.api_key
        return AssemblyAITranscriber(aai.Transcriber())

    client = openai.AsyncOpenAI(
        api_key=config.openai.api_key,
        timeout=config.openai.timeout_seconds,
    )
    return OpenAITranscriber(client, config.openai.model)


@cache
def get_handler() -> AudioFileHandler:
    """Returns the configured audio file handler."""
    config = get_config()
    pipeline = config.pipeline
    fetcher = HttpAssetFetcher(
        requests.Session(),
        config.slack.bot_token,
        timeout_seconds=pipeline.download_timeout_seconds,
        chunk_size=pipeline.download_chunk_size,
    )
    segmenter = FfmpegSegmenter(
        ffmpeg_path=pipeline.ffmpeg_path,
        ffprobe_path=pipeline.ffprobe_path,
        codec=pipeline.segment_codec,
        bitrate=pipeline.segment_bitrate,
        extension=pipeline.segment_extension,
        index_digits=pipeline.segment_index_digits,
    )
    return AudioFileHandler(
        fetcher,
        segmenter,
        get_transcription_service(),
        ScratchStore(Path(pipeline.scratch_root)),
        TranscriptBuilder(),
        max_direct_upload_bytes=pipeline.max_direct_upload_bytes,
        segment_duration_seconds=pipeline.segment_duration_seconds,
    )


def get_worker() -> Worker:
    """Returns the configured worker."""
    return Worker(
        get_slack_app(),
        get_handler(),
        get_messenger(),
        TranscriptBuilder(),
        get_config().slack.app_token,
    )
