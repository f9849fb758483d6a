"""
Core modules for yt-subs

This package contains the transcript extraction pipeline:
- dependencies.py: yt-dlp / ffmpeg preflight
- resolve.py: YouTube URL → video ID
- fetch.py: video ID → English WebVTT captions
- convert.py: captions → deduplicated plain text
- files.py: artifact paths and filesystem side effects
- extract.py: pipeline orchestration and result envelope
"""

from ytsubs.extract import ExtractionResult, ExtractionStage, TranscriptExtractor

__all__ = ["ExtractionResult", "ExtractionStage", "TranscriptExtractor"]
