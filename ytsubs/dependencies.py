"""
Dependency preflight.

Single responsibility: make sure yt-dlp and ffmpeg can be found before the
pipeline touches the filesystem or the network.
"""

import shutil
from typing import Callable, Optional

import structlog

from config import ToolsConfig
from ytsubs.errors import MissingDependencyError

logger = structlog.get_logger(__name__)

Which = Callable[[str], Optional[str]]


def check_dependencies(tools: ToolsConfig, which: Which = shutil.which) -> None:
    """Raise MissingDependencyError naming every executable that is not on PATH"""
    missing = [name for name in tools.required_executables if not which(name)]

    if missing:
        logger.error("Missing required dependencies", missing=missing)
        raise MissingDependencyError(missing)

    logger.debug("Dependencies verified", executables=tools.required_executables)
