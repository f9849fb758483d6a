#!/usr/bin/env python3
"""
yt-subs MCP server

Exposes the transcript extraction pipeline as the get_youtube_transcript tool
over stdio. The tool returns the JSON result envelope as text; failed
extractions are raised out of the handler so the response is flagged isError.
"""

import asyncio
import sys
from typing import Any, Dict, List, Optional

import mcp.types as types
import structlog
from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from config import load_config
from logging_setup import configure_logging
from ytsubs.extract import ExtractionResult, TranscriptExtractor

logger = structlog.get_logger(__name__)

SERVER_NAME = "yt-subs-mcp"
TOOL_NAME = "get_youtube_transcript"

TOOL_DESCRIPTION = (
    "Extract the subtitle/transcript text from a YouTube video URL. Returns the clean text "
    "content of the video's English subtitles (auto-generated or manual). Requires yt-dlp "
    "and ffmpeg to be installed on the system."
)

TOOL_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "url": {
            "type": "string",
            "description": "The YouTube video URL (e.g., https://www.youtube.com/watch?v=VIDEO_ID)",
        },
        "save_to_file": {
            "type": "boolean",
            "description": (
                "Whether to save the transcript to a file (default: true). Files are saved to the "
                "directory specified by YT_SUBS_DOWNLOAD_DIR environment variable, or "
                "~/Downloads/yts/ if not set."
            ),
            "default": True,
        },
    },
    "required": ["url"],
}


class ToolFailure(Exception):
    """Carries a failure envelope out of the tool handler"""

    def __init__(self, result: ExtractionResult):
        super().__init__(result.to_json())
        self.result = result


def transcript_tool() -> types.Tool:
    return types.Tool(
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        inputSchema=TOOL_INPUT_SCHEMA,
    )


def run_transcript_tool(extractor: TranscriptExtractor, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
    """Validate tool arguments, run the extraction and wrap the envelope"""
    arguments = arguments or {}
    url = arguments.get("url")
    save_to_file = arguments.get("save_to_file", True)

    if not isinstance(url, str) or not url.strip():
        raise ToolFailure(ExtractionResult.failed("The 'url' argument must be a non-empty string"))
    if not isinstance(save_to_file, bool):
        raise ToolFailure(ExtractionResult.failed("The 'save_to_file' argument must be a boolean"))

    result = extractor.extract(url, save_to_file=save_to_file)
    if not result.success:
        raise ToolFailure(result)

    return [types.TextContent(type="text", text=result.to_json())]


def create_server(extractor: TranscriptExtractor) -> Server:
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [transcript_tool()]

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        if name != TOOL_NAME:
            raise ValueError(f"Unknown tool: {name}")

        logger.info("Tool called", tool=name)
        # The pipeline blocks on external processes; keep the event loop free
        return await asyncio.to_thread(run_transcript_tool, extractor, arguments)

    return server


async def serve(extractor: TranscriptExtractor) -> None:
    server = create_server(extractor)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("YouTube Subtitles MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main():
    """Entry point for the MCP server"""
    load_dotenv()
    config = load_config()
    configure_logging(debug=config.debug, colors=False)

    extractor = TranscriptExtractor(config)

    try:
        asyncio.run(serve(extractor))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    sys.exit(0)


if __name__ == "__main__":
    main()
