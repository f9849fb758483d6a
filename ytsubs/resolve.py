"""
Video ID resolution.

Single responsibility: YouTube URL → canonical video ID, as reported by yt-dlp.
"""

from typing import List

import structlog

from config import ToolsConfig
from ytsubs.errors import IdentifierResolutionError
from ytsubs.runner import ToolRunner, run_tool

logger = structlog.get_logger(__name__)


def yt_dlp_base_args(tools: ToolsConfig) -> List[str]:
    """Executable plus the options shared by every yt-dlp call"""
    args = [tools.yt_dlp]
    if tools.cookies_from_browser:
        args += ["--cookies-from-browser", tools.cookies_from_browser]
    args += ["--no-playlist", "--no-warnings"]
    return args


def resolve_video_id(url: str, tools: ToolsConfig, runner: ToolRunner = run_tool) -> str:
    """Ask yt-dlp for the video ID of a URL"""
    logger.info("Resolving video ID", url=url)

    result = runner(yt_dlp_base_args(tools) + ["--print", "id", "--", url])
    if not result.ok:
        logger.error("yt-dlp could not resolve video", url=url, returncode=result.returncode)
        raise IdentifierResolutionError(
            url,
            f"yt-dlp exited with status {result.returncode}",
            tool_output=result.error_output(),
        )

    # yt-dlp may exit cleanly without printing anything for malformed references
    lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
    if not lines:
        logger.error("yt-dlp printed no video ID", url=url)
        raise IdentifierResolutionError(url, "Could not extract video ID from URL")

    video_id = lines[0]
    logger.info("Video ID resolved", url=url, video_id=video_id)
    return video_id
