"""
Subtitle download.

Single responsibility: video ID → English WebVTT caption file on disk.
Manual subtitles are preferred; yt-dlp falls back to auto-generated ones.
"""

import os
from typing import Optional

import structlog

from config import ToolsConfig
from ytsubs.errors import SubtitleUnavailableError
from ytsubs.files import ArtifactKind, FileSystem, LocalFileSystem, SubtitleArtifact, markup_path
from ytsubs.resolve import yt_dlp_base_args
from ytsubs.runner import ToolRunner, run_tool

logger = structlog.get_logger(__name__)

SUBTITLE_LANGUAGE = "en"
SUBTITLE_FORMAT = "vtt"

NO_ENGLISH_SUBTITLES = "The video may not have English subtitles available."


def fetch_subtitles(
    url: str,
    video_id: str,
    download_dir: str,
    tools: ToolsConfig,
    runner: ToolRunner = run_tool,
    fs: Optional[FileSystem] = None,
) -> SubtitleArtifact:
    """Download the English caption track of a video as <video_id>.en.vtt"""
    fs = fs or LocalFileSystem()
    expected = markup_path(download_dir, video_id, SUBTITLE_LANGUAGE)
    output_template = os.path.join(download_dir, f"{video_id}.%(ext)s")

    logger.info("Downloading subtitles", video_id=video_id, language=SUBTITLE_LANGUAGE)

    args = yt_dlp_base_args(tools) + [
        "--skip-download",
        "--write-subs",
        "--write-auto-subs",
        "--sub-langs", SUBTITLE_LANGUAGE,
        "--sub-format", SUBTITLE_FORMAT,
        "-o", output_template,
        "--", url,
    ]
    result = runner(args)

    if not result.ok:
        logger.error("Subtitle download failed", video_id=video_id, returncode=result.returncode)
        raise SubtitleUnavailableError(
            video_id,
            f"yt-dlp exited with status {result.returncode}",
            tool_output=result.error_output(),
        )

    # A clean exit does not guarantee a caption file was written
    if not fs.exists(expected):
        logger.warning("No English subtitles found", video_id=video_id)
        raise SubtitleUnavailableError(video_id, NO_ENGLISH_SUBTITLES)

    logger.info("Subtitles downloaded", video_id=video_id, filepath=expected)
    return SubtitleArtifact(path=expected, kind=ArtifactKind.RAW_MARKUP)
