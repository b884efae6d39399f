"""Worker that handles chat mentions and orchestration of transcription runs."""

from typing import Any

from pydantic import ValidationError
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from domain import MentionEvent, SourceAsset, TranscriptBuilder, replies
from exceptions import MessagePostError
from handlers import AudioFileHandler
from infrastructure.interfaces import MessageSink
from structured_logging import setup_logging

logger = setup_logging()


class Worker:
    """Receives bot mentions and replies with transcripts of attached audio files."""

    def __init__(
        self,
        app: AsyncApp,
        handler: AudioFileHandler,
        messenger: MessageSink,
        transcript_builder: TranscriptBuilder,
        app_token: str,
    ):
        self._app = app
        self._handler = handler
        self._messenger = messenger
        self._transcript_builder = transcript_builder
        self._app_token = app_token

    async def start(self) -> None:
        """Subscribes to mentions and runs the Socket Mode connection until stopped."""
        self._app.event("app_mention")(self._on_mention)
        logger.info("Worker initialized, connecting to Slack")
        await AsyncSocketModeHandler(self._app, self._app_token).start_async()

    async def _on_mention(self, event: dict[str, Any]) -> None:
        """Listener for each received mention."""
        logger.info(
            "Mention received",
            extra={"channel": event.get("channel"), "file_count": len(event.get("files", []))},
        )

        try:
            mention = MentionEvent.model_validate(event)
        except ValidationError as e:
            logger.exception("Invalid mention payload", extra={"error": str(e)})
            return

        await self.handle_mention(mention)

    async def handle_mention(self, mention: MentionEvent) -> None:
        """
        Transcribes the audio files of one mention, one after another.

        The first failure stops the remaining files and posts a generic notice.
        """
        if not mention.has_attachments:
            await self._reply(mention, replies.GREETING)
            return

        audio_files = mention.audio_files
        if not audio_files:
            await self._reply(mention, replies.NO_AUDIO_FILES)
            return

        try:
            await self._reply(mention, replies.ACCEPTED)
            for file in audio_files:
                result = await self._handler.process(SourceAsset.from_file(file))
                await self._reply(
                    mention,
                    self._transcript_builder.format_reply(result.asset_name, result.text),
                )
                logger.info(
                    "Transcript posted",
                    extra={"channel": mention.channel, "asset_id": result.asset_id},
                )
        except Exception:
            logger.exception(
                "Mention processing failed", extra={"channel": mention.channel}
            )
            try:
                await self._reply(mention, replies.FAILURE)
            except MessagePostError:
                logger.exception(
                    "Failure notice could not be posted",
                    extra={"channel": mention.channel},
                )

    async def _reply(self, mention: MentionEvent, text: str) -> None:
        await self._messenger.post_message(mention.channel, text, mention.thread_ts)
