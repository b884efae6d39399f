"""Abstract interface for posting replies to the chat platform."""

from abc import ABC, abstractmethod


class MessageSink(ABC):
    """Abstract base class for chat message delivery."""

    @abstractmethod
    async def post_message(
        self, channel: str, text: str, thread_ts: str | None = None
    ) -> None:
        """
        Posts a text message to a channel, optionally inside a thread.

        Raises:
            MessagePostError: If the platform rejects the message.
        """
