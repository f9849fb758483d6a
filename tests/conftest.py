from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Sequence

import pytest

from config import AppConfig, ToolsConfig
from ytsubs.runner import RunResult

VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

SAMPLE_SRT = """1
00:00:00,000 --> 00:00:02,000
[Music]

2
00:00:02,000 --> 00:00:04,000
[Music]

3
00:00:04,000 --> 00:00:06,000
[Music]

4
00:00:06,000 --> 00:00:08,000
  hello everyone

5
00:00:08,000 --> 00:00:10,000
hello everyone
welcome back to the channel

6
00:00:10,000 --> 00:00:12,000
today we talk about captions
"""

SAMPLE_TEXT = "\n".join([
    "[Music]",
    "hello everyone",
    "welcome back to the channel",
    "today we talk about captions",
])


class MemoryFileSystem:
    """In-memory FileSystem used to test stages without touching the disk"""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.dirs: set[str] = set()

    def ensure_dir(self, path: str) -> None:
        self.dirs.add(path)

    def write_text(self, path: str, text: str) -> None:
        self.files[path] = text

    def read_text(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def remove_if_exists(self, path: str) -> None:
        self.files.pop(path, None)

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.dirs

    def glob(self, directory: str, pattern: str) -> list[str]:
        return sorted(
            path
            for path in self.files
            if os.path.dirname(path) == directory and fnmatch.fnmatch(os.path.basename(path), pattern)
        )


class FakeToolchain:
    """Stands in for yt-dlp and ffmpeg, writing the files they would produce"""

    def __init__(
        self,
        fs,
        video_id: str = VIDEO_ID,
        srt: str = SAMPLE_SRT,
        has_subtitles: bool = True,
        extra_languages: Sequence[str] = (),
    ) -> None:
        self.fs = fs
        self.video_id = video_id
        self.srt = srt
        self.has_subtitles = has_subtitles
        self.extra_languages = tuple(extra_languages)
        self.resolve_result: RunResult | None = None
        self.fetch_result: RunResult | None = None
        self.ffmpeg_result: RunResult | None = None
        self.calls: list[list[str]] = []

    def __call__(self, args: Sequence[str]) -> RunResult:
        args = list(args)
        self.calls.append(args)

        if args[0] == "ffmpeg":
            if self.ffmpeg_result is not None:
                return self.ffmpeg_result
            self.fs.write_text(args[-1], self.srt)
            return RunResult(0, "", "")

        if "--print" in args:
            if self.resolve_result is not None:
                return self.resolve_result
            return RunResult(0, f"{self.video_id}\n", "")

        if "--write-subs" in args:
            if self.fetch_result is not None:
                return self.fetch_result
            template = args[args.index("-o") + 1]
            if self.has_subtitles:
                for language in ("en",) + self.extra_languages:
                    self.fs.write_text(template.replace("%(ext)s", f"{language}.vtt"), "WEBVTT\n")
            return RunResult(0, "", "")

        raise AssertionError(f"unexpected command: {args}")

    def commands(self, marker: str) -> list[list[str]]:
        return [call for call in self.calls if marker in call or call[0] == marker]


def found_on_path(name: str) -> str:
    return f"/usr/bin/{name}"


@pytest.fixture()
def download_dir(tmp_path: Path) -> str:
    return str(tmp_path / "Downloads" / "yts")


@pytest.fixture()
def config(download_dir: str) -> AppConfig:
    return AppConfig(
        download_dir=download_dir,
        tools=ToolsConfig(yt_dlp="yt-dlp", ffmpeg="ffmpeg", cookies_from_browser=None),
    )


@pytest.fixture()
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture()
def toolchain(memory_fs: MemoryFileSystem) -> FakeToolchain:
    return FakeToolchain(memory_fs)
