"""
Error taxonomy for the transcript extraction pipeline.

Every stage failure is one of the ExtractionError subclasses below. Each error
keeps its structured context as attributes; render() turns that context into
the human-readable message that ends up in the failure envelope.
"""

from typing import List, Optional


class ExtractionError(Exception):
    """Base class for all pipeline failures"""

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


class MissingDependencyError(ExtractionError):
    """One or more required executables are not on PATH"""

    def __init__(self, names: List[str]):
        super().__init__(names)
        self.names = list(names)

    def render(self) -> str:
        return (
            f"Missing required dependencies: {', '.join(self.names)}. "
            f"Please install them before using this tool."
        )


class IdentifierResolutionError(ExtractionError):
    """The video reference could not be resolved to a video ID"""

    def __init__(self, url: str, detail: str, tool_output: Optional[str] = None):
        super().__init__(url, detail)
        self.url = url
        self.detail = detail
        self.tool_output = tool_output

    def render(self) -> str:
        message = f"Failed to get video ID: {self.detail}"
        if self.tool_output:
            message += f" ({self.tool_output})"
        return message


class SubtitleUnavailableError(ExtractionError):
    """No English caption track could be downloaded"""

    def __init__(self, video_id: str, detail: str, tool_output: Optional[str] = None):
        super().__init__(video_id, detail)
        self.video_id = video_id
        self.detail = detail
        self.tool_output = tool_output

    def render(self) -> str:
        message = f"Failed to download subtitles: {self.detail}"
        if self.tool_output:
            message += f" ({self.tool_output})"
        return message


class ConversionError(ExtractionError):
    """Transcoding the captions or deriving the text failed"""

    def __init__(self, video_id: str, detail: str, tool_output: Optional[str] = None):
        super().__init__(video_id, detail)
        self.video_id = video_id
        self.detail = detail
        self.tool_output = tool_output

    def render(self) -> str:
        message = f"Failed to convert subtitles to text: {self.detail}"
        if self.tool_output:
            message += f" ({self.tool_output})"
        return message


class FileSystemError(ExtractionError):
    """Creating the download directory or writing an artifact failed"""

    def __init__(self, path: str, detail: str):
        super().__init__(path, detail)
        self.path = path
        self.detail = detail

    def render(self) -> str:
        return f"File system error at {self.path}: {self.detail}"
