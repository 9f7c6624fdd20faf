"""
Tubescribe - video-to-transcript publishing pipeline.

Takes a video URL and produces a published text transcript through a
three-stage pipeline: audio acquisition (yt-dlp) → transcription
(whisper.cpp, Ollama or an OpenAI-compatible API) → publication to a
remote blob store.
"""

__version__ = "0.1.0"
