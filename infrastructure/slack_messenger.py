"""Slack implementation of the MessageSink interface."""

import aiohttp
from slack_sdk.errors import SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from exceptions import MessagePostError
from structured_logging import setup_logging

from .interfaces import MessageSink

logger = setup_logging()


class SlackMessenger(MessageSink):
    """Posts replies through the Slack Web API."""

    def __init__(self, client: AsyncWebClient):
        self._client = client

    async def post_message(
        self, channel: str, text: str, thread_ts: str | None = None
    ) -> None:
        try:
            await self._client.chat_postMessage(
                channel=channel, text=text, thread_ts=thread_ts
            )
        except (SlackClientError, aiohttp.ClientError) as e:
            logger.exception("Slack message post failed", extra={"channel": channel})
            raise MessagePostError(channel, e) from e
        logger.info("Message posted", extra={"channel": channel})
