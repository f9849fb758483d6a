#!/usr/bin/env python3
"""
yt-subs - command line entry point

Runs a single transcript extraction and prints the JSON result envelope.
The same pipeline is exposed to MCP clients by server.py.
"""

import sys
from typing import List, Optional

import structlog
from dotenv import load_dotenv

from config import load_config
from logging_setup import configure_logging
from ytsubs.extract import TranscriptExtractor

logger = structlog.get_logger(__name__)

USAGE = """Usage: python main.py <youtube_url> [--no-save]
       python main.py <youtube_url>            # Save transcript to the download directory
       python main.py <youtube_url> --no-save  # Print transcript only

Examples:
  python main.py https://www.youtube.com/watch?v=dQw4w9WgXcQ
  python main.py https://youtu.be/dQw4w9WgXcQ --no-save"""


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with argument parsing"""
    args = list(sys.argv[1:] if argv is None else argv)
    save_to_file = "--no-save" not in args
    positional = [arg for arg in args if not arg.startswith("--")]

    if len(positional) != 1:
        print(USAGE, file=sys.stderr)
        return 1

    load_dotenv()
    config = load_config()
    configure_logging(debug=config.debug)

    if config.debug:
        logger.debug("Configuration loaded",
                     download_dir=config.download_dir,
                     yt_dlp=config.tools.yt_dlp,
                     ffmpeg=config.tools.ffmpeg)

    result = TranscriptExtractor(config).extract(positional[0], save_to_file=save_to_file)
    print(result.to_json())
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
