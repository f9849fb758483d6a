"""
Artifact and filesystem handling.

Single responsibility: every filesystem side effect of the pipeline goes
through a FileSystem object, so the other stages can run against an
in-memory implementation in tests.
"""

import glob as globlib
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol

import structlog
from pydantic import BaseModel, Field

from ytsubs.errors import FileSystemError

logger = structlog.get_logger(__name__)


class ArtifactKind(str, Enum):
    RAW_MARKUP = "raw-markup"
    INTERMEDIATE_CAPTION = "intermediate-caption"
    FINAL_TEXT = "final-text"


class SubtitleArtifact(BaseModel):
    """A file produced by one stage of the pipeline"""

    path: str = Field(description="Location of the artifact")
    kind: ArtifactKind = Field(description="Pipeline stage that produced it")

    @property
    def transient(self) -> bool:
        return self.kind != ArtifactKind.FINAL_TEXT


def markup_path(download_dir: str, video_id: str, language: str = "en") -> str:
    return os.path.join(download_dir, f"{video_id}.{language}.vtt")


def caption_path(download_dir: str, video_id: str) -> str:
    return os.path.join(download_dir, f"{video_id}.srt")


def text_path(download_dir: str, video_id: str) -> str:
    return os.path.join(download_dir, f"{video_id}.txt")


def markup_pattern(video_id: str) -> str:
    """Glob pattern matching every caption variant fetched for a video"""
    return f"{globlib.escape(video_id)}.*.vtt"


class FileSystem(Protocol):
    def ensure_dir(self, path: str) -> None: ...

    def write_text(self, path: str, text: str) -> None: ...

    def read_text(self, path: str) -> str: ...

    def remove_if_exists(self, path: str) -> None: ...

    def exists(self, path: str) -> bool: ...

    def glob(self, directory: str, pattern: str) -> List[str]: ...


class LocalFileSystem:
    """FileSystem backed by the local disk"""

    def ensure_dir(self, path: str) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(path, f"could not create directory: {e.strerror or e}")

    def write_text(self, path: str, text: str) -> None:
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            raise FileSystemError(path, f"could not write file: {e.strerror or e}")

    def read_text(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    def remove_if_exists(self, path: str) -> None:
        try:
            os.remove(path)
            logger.debug("Removed artifact", filepath=path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise FileSystemError(path, f"could not remove file: {e.strerror or e}")

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def glob(self, directory: str, pattern: str) -> List[str]:
        return sorted(globlib.glob(os.path.join(globlib.escape(directory), pattern)))


def remove_transient_artifacts(fs: FileSystem, download_dir: str, video_id: str) -> None:
    """Delete the intermediate caption file and every raw markup variant"""
    fs.remove_if_exists(caption_path(download_dir, video_id))
    for path in fs.glob(download_dir, markup_pattern(video_id)):
        fs.remove_if_exists(path)


def finalize_transcript(fs: FileSystem, path: str, text: str, save: bool) -> Optional[str]:
    """Write the transcript when saving was requested, otherwise make sure it is gone.

    Returns the saved path, or None when nothing was kept on disk.
    """
    if save:
        fs.write_text(path, text)
        logger.info("Transcript file saved", filepath=path, size_kb=len(text.encode('utf-8')) / 1024)
        return path

    fs.remove_if_exists(path)
    return None
