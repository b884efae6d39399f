"""Fixed chat replies sent to the requester."""

GREETING = (
    "Hello! Mention me with an audio file attached and I will transcribe it for you."
)
NO_AUDIO_FILES = "None of the attached files is an audio file."
ACCEPTED = "Audio file received. Starting transcription."
FAILURE = "Sorry, something went wrong while transcribing the audio file."
