"""Tests for mention handling and replies."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from domain import MentionEvent, Stage, TranscriptBuilder, TranscriptResult, replies
from exceptions import FetchError, MessagePostError, PipelineError
from tests.fakes import RecordingMessenger
from worker import Worker


def mention_payload(files=None, thread_ts=None):
    payload = {
        "type": "app_mention",
        "user": "U1",
        "text": "<@UBOT> please transcribe",
        "channel": "C42",
        "ts": "1712345678.000100",
    }
    if thread_ts is not None:
        payload["thread_ts"] = thread_ts
    if files is not None:
        payload["files"] = files
    return payload


def file_payload(file_id, name, mimetype, filetype):
    return {
        "id": file_id,
        "name": name,
        "url_private": f"https://files.slack.com/files-pri/T1-{file_id}/{name}",
        "mimetype": mimetype,
        "filetype": filetype,
        "size": 2048,
    }


def result_for(asset):
    return TranscriptResult(
        asset_id=asset.id,
        asset_name=asset.name,
        fragments=[f"text of {asset.name}"],
        text=f"text of {asset.name}",
    )


def make_worker(handler=None):
    if handler is None:
        handler = MagicMock()
        handler.process = AsyncMock(side_effect=result_for)
    messenger = RecordingMessenger()
    worker = Worker(MagicMock(), handler, messenger, TranscriptBuilder(), "xapp-token")
    return worker, handler, messenger


class FailureNoticeLostMessenger(RecordingMessenger):
    """Accepts every reply except the generic failure notice."""

    async def post_message(self, channel, text, thread_ts=None):
        if text == replies.FAILURE:
            raise MessagePostError(channel, ConnectionError("socket closed"))
        await super().post_message(channel, text, thread_ts)


HIDDEN_FILE = {"id": "F2", "mode": "hidden_by_limit"}


def texts(messenger):
    return [text for _, text, _ in messenger.messages]


class TestHandleMention:
    """Tests for the reply flow of one mention."""

    def test_no_files_greets(self):
        worker, handler, messenger = make_worker()

        asyncio.run(worker._on_mention(mention_payload()))

        assert texts(messenger) == [replies.GREETING]
        handler.process.assert_not_called()

    def test_no_audio_files(self):
        worker, handler, messenger = make_worker()
        files = [file_payload("F1", "notes.pdf", "application/pdf", "pdf")]

        asyncio.run(worker._on_mention(mention_payload(files)))

        assert texts(messenger) == [replies.NO_AUDIO_FILES]
        handler.process.assert_not_called()

    def test_transcribes_audio_files_in_order(self):
        worker, handler, messenger = make_worker()
        files = [
            file_payload("F1", "intro.mp3", "audio/mpeg", "mp3"),
            file_payload("F2", "slides.png", "image/png", "png"),
            file_payload("F3", "qa.m4a", "audio/x-m4a", "m4a"),
        ]

        asyncio.run(worker._on_mention(mention_payload(files)))

        processed = [call.args[0] for call in handler.process.call_args_list]
        assert [asset.id for asset in processed] == ["F1", "F3"]
        assert processed[0].extension == "mp3"
        assert texts(messenger) == [
            replies.ACCEPTED,
            "Transcription result (intro.mp3):\ntext of intro.mp3",
            "Transcription result (qa.m4a):\ntext of qa.m4a",
        ]
        assert all(channel == "C42" for channel, _, _ in messenger.messages)

    def test_replies_in_thread(self):
        worker, _, messenger = make_worker()

        asyncio.run(worker._on_mention(mention_payload(thread_ts="1712345000.000001")))

        assert messenger.messages == [("C42", replies.GREETING, "1712345000.000001")]

    def test_failure_posts_generic_notice_and_stops(self):
        handler = MagicMock()
        cause = FetchError("https://files.slack.com/x", ConnectionError("reset"))
        handler.process = AsyncMock(side_effect=PipelineError(Stage.FETCHING, "F1", cause))
        worker, _, messenger = make_worker(handler)
        files = [
            file_payload("F1", "intro.mp3", "audio/mpeg", "mp3"),
            file_payload("F2", "qa.mp3", "audio/mpeg", "mp3"),
        ]

        asyncio.run(worker._on_mention(mention_payload(files)))

        assert texts(messenger) == [replies.ACCEPTED, replies.FAILURE]
        assert handler.process.await_count == 1
        assert "files.slack.com" not in replies.FAILURE

    def test_failure_notice_post_error_is_logged(self, caplog):
        handler = MagicMock()
        handler.process = AsyncMock(side_effect=RuntimeError("boom"))
        messenger = FailureNoticeLostMessenger()
        worker = Worker(MagicMock(), handler, messenger, TranscriptBuilder(), "xapp-token")
        files = [file_payload("F1", "intro.mp3", "audio/mpeg", "mp3")]

        asyncio.run(worker._on_mention(mention_payload(files)))

        assert texts(messenger) == [replies.ACCEPTED]
        assert "Failure notice could not be posted" in caplog.text

    def test_hidden_file_does_not_block_audio(self):
        worker, handler, messenger = make_worker()
        files = [file_payload("F1", "intro.mp3", "audio/mpeg", "mp3"), HIDDEN_FILE]

        asyncio.run(worker._on_mention(mention_payload(files)))

        processed = [call.args[0] for call in handler.process.call_args_list]
        assert [asset.id for asset in processed] == ["F1"]
        assert texts(messenger) == [
            replies.ACCEPTED,
            "Transcription result (intro.mp3):\ntext of intro.mp3",
        ]

    def test_only_hidden_files(self):
        worker, handler, messenger = make_worker()

        asyncio.run(worker._on_mention(mention_payload([HIDDEN_FILE])))

        assert texts(messenger) == [replies.NO_AUDIO_FILES]
        handler.process.assert_not_called()

    def test_invalid_payload_dropped(self):
        worker, handler, messenger = make_worker()

        asyncio.run(worker._on_mention({"type": "app_mention", "text": "no channel"}))

        assert messenger.messages == []
        handler.process.assert_not_called()


class TestMentionEvent:
    """Tests for parsing the inbound payload."""

    def test_selects_audio_by_mimetype(self):
        mention = MentionEvent.model_validate(
            mention_payload(
                [
                    file_payload("F1", "a.wav", "audio/wav", "wav"),
                    file_payload("F2", "b.mp4", "video/mp4", "mp4"),
                ]
            )
        )

        assert [f.id for f in mention.audio_files] == ["F1"]

    def test_missing_files_defaults_empty(self):
        mention = MentionEvent.model_validate(mention_payload())

        assert mention.files == []
        assert mention.thread_ts is None

    def test_unreadable_descriptor_skipped(self):
        mention = MentionEvent.model_validate(
            mention_payload(
                [
                    file_payload("F1", "a.wav", "audio/wav", "wav"),
                    {"id": "F2", "file_access": "check_file_info"},
                    "not a descriptor",
                ]
            )
        )

        assert [f.id for f in mention.files] == ["F1"]
        assert mention.skipped_file_ids == ["F2", "None"]
        assert mention.has_attachments
