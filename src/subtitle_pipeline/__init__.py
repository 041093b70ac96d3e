"""Upload media, transcribe it with Gemini and render SRT subtitles."""
