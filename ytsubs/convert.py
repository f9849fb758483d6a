"""
Caption to text conversion.

Single responsibility: WebVTT caption file → clean, deduplicated plain text.

ffmpeg first normalizes the WebVTT file into SubRip, whose layout is simple
to strip: a numeric index line, a "start --> end" timing line, then one or
more text lines followed by a blank separator.
"""

from typing import Iterable, List, Optional

import structlog
from pydantic import BaseModel, Field

from config import ToolsConfig
from ytsubs.errors import ConversionError, FileSystemError
from ytsubs.files import (
    ArtifactKind,
    FileSystem,
    LocalFileSystem,
    SubtitleArtifact,
    caption_path,
    remove_transient_artifacts,
    text_path,
)
from ytsubs.runner import ToolRunner, run_tool

logger = structlog.get_logger(__name__)

CUE_MARKER = "-->"


class ConvertedTranscript(BaseModel):
    """Transcript text plus the location it would be saved to"""

    text: str = Field(description="Deduplicated transcript text")
    artifact: SubtitleArtifact = Field(description="Final text artifact (not yet written)")

    @property
    def line_count(self) -> int:
        return len(self.text.splitlines())


def is_caption_text(line: str) -> bool:
    """True for a trimmed SubRip line that carries spoken text"""
    if not line:
        return False
    if line.isdigit():
        return False
    return CUE_MARKER not in line


def dedupe_lines(lines: Iterable[str]) -> List[str]:
    """Drop every line already seen earlier in the document, keeping first occurrences.

    Auto-generated captions repeat each phrase across overlapping cues, so a
    repeat anywhere in the document is dropped, not only adjacent ones.
    """
    seen = set()
    unique = []
    for line in lines:
        if line in seen:
            continue
        seen.add(line)
        unique.append(line)
    return unique


def caption_text(srt: str) -> str:
    """Plain text of a SubRip document: no indices, timings, blanks or repeats"""
    lines = (line.strip() for line in srt.splitlines())
    return "\n".join(dedupe_lines(line for line in lines if is_caption_text(line)))


def transcode_to_srt(
    source: str,
    destination: str,
    video_id: str,
    tools: ToolsConfig,
    runner: ToolRunner,
    fs: FileSystem,
) -> None:
    args = [
        tools.ffmpeg,
        "-hide_banner",
        "-loglevel", "error",
        "-y",
        "-i", source,
        "-f", "srt",
        destination,
    ]
    result = runner(args)

    if not result.ok:
        logger.error("ffmpeg conversion failed", video_id=video_id, returncode=result.returncode)
        raise ConversionError(
            video_id,
            f"ffmpeg exited with status {result.returncode}",
            tool_output=result.error_output(),
        )

    if not fs.exists(destination):
        raise ConversionError(video_id, "ffmpeg did not produce a SubRip file")


def convert_to_text(
    markup: SubtitleArtifact,
    video_id: str,
    download_dir: str,
    tools: ToolsConfig,
    runner: ToolRunner = run_tool,
    fs: Optional[FileSystem] = None,
) -> ConvertedTranscript:
    """Convert a downloaded caption file into transcript text.

    The intermediate .srt file and every <video_id>.*.vtt file in the
    download directory are deleted before returning, whether or not the
    conversion succeeded.
    """
    fs = fs or LocalFileSystem()
    srt_file = caption_path(download_dir, video_id)

    logger.info("Converting subtitles to text", video_id=video_id, source=markup.path)

    try:
        transcode_to_srt(markup.path, srt_file, video_id, tools, runner, fs)
        try:
            text = caption_text(fs.read_text(srt_file))
        except OSError as e:
            raise ConversionError(video_id, f"could not read {srt_file}: {e}")
    finally:
        try:
            remove_transient_artifacts(fs, download_dir, video_id)
        except FileSystemError as e:
            logger.warning("Could not remove caption files", video_id=video_id, error=str(e))

    if not text:
        raise ConversionError(video_id, "caption track contained no text")

    converted = ConvertedTranscript(
        text=text,
        artifact=SubtitleArtifact(path=text_path(download_dir, video_id), kind=ArtifactKind.FINAL_TEXT),
    )
    logger.info("Subtitles converted",
                video_id=video_id,
                lines=converted.line_count,
                char_count=len(text))
    return converted
