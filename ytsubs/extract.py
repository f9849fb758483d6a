"""
Transcript extraction pipeline.

Sequences the stages (dependency check → video ID → subtitles → text →
save/discard) and turns every outcome into an ExtractionResult envelope.
Nothing raised by a stage escapes extract().
"""

import json
import shutil
from enum import Enum
from typing import Any, Dict, Optional

import structlog
from pydantic import BaseModel, Field

from config import AppConfig
from ytsubs.convert import convert_to_text
from ytsubs.dependencies import Which, check_dependencies
from ytsubs.errors import ExtractionError
from ytsubs.fetch import fetch_subtitles
from ytsubs.files import FileSystem, LocalFileSystem, finalize_transcript, remove_transient_artifacts, text_path
from ytsubs.resolve import resolve_video_id
from ytsubs.runner import ToolRunner, run_tool

logger = structlog.get_logger(__name__)


class ExtractionStage(str, Enum):
    CHECKING_DEPS = "checking_deps"
    RESOLVING_ID = "resolving_id"
    FETCHING_SUBS = "fetching_subs"
    CONVERTING = "converting"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


# Stages after which transient caption files may exist on disk
_ARTIFACT_STAGES = (ExtractionStage.FETCHING_SUBS, ExtractionStage.CONVERTING, ExtractionStage.FINALIZING)


class ExtractionResult(BaseModel):
    """Success or failure envelope returned to the caller"""

    success: bool
    video_id: Optional[str] = None
    transcript: Optional[str] = None
    saved_path: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
    failed_stage: Optional[ExtractionStage] = Field(None, exclude=True)

    @classmethod
    def succeeded(cls, video_id: str, transcript: str, saved_path: Optional[str]) -> "ExtractionResult":
        if saved_path:
            message = f"Transcript extracted and saved to {saved_path}"
        else:
            message = "Transcript extracted successfully"
        return cls(
            success=True,
            video_id=video_id,
            transcript=transcript,
            saved_path=saved_path,
            message=message,
        )

    @classmethod
    def failed(cls, error: str, stage: Optional[ExtractionStage] = None) -> "ExtractionResult":
        return cls(success=False, error=error, failed_stage=stage)

    def to_payload(self) -> Dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "video_id": self.video_id,
                "transcript": self.transcript,
                "saved_path": self.saved_path,
                "message": self.message,
            }
        return {"success": False, "error": self.error}

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), indent=2, ensure_ascii=False)


class TranscriptExtractor:
    """Runs the extraction pipeline against an explicit configuration"""

    def __init__(
        self,
        config: AppConfig,
        runner: ToolRunner = run_tool,
        fs: Optional[FileSystem] = None,
        which: Which = shutil.which,
    ):
        self.config = config
        self.runner = runner
        self.fs = fs or LocalFileSystem()
        self.which = which

    @property
    def download_dir(self) -> str:
        return self.config.download_dir

    def extract(self, url: str, save_to_file: bool = True) -> ExtractionResult:
        """Extract the transcript of a video; never raises"""
        log = logger.bind(url=url, save_to_file=save_to_file)
        stage = ExtractionStage.CHECKING_DEPS
        video_id = None

        if not isinstance(url, str) or not url.strip():
            return ExtractionResult.failed("A video URL is required", stage)
        url = url.strip()

        try:
            log.info("Extraction stage started", stage=stage.value)
            check_dependencies(self.config.tools, which=self.which)
            self.fs.ensure_dir(self.download_dir)

            stage = ExtractionStage.RESOLVING_ID
            log.info("Extraction stage started", stage=stage.value)
            video_id = resolve_video_id(url, self.config.tools, self.runner)
            log = log.bind(video_id=video_id)

            stage = ExtractionStage.FETCHING_SUBS
            log.info("Extraction stage started", stage=stage.value)
            markup = fetch_subtitles(url, video_id, self.download_dir, self.config.tools, self.runner, self.fs)

            stage = ExtractionStage.CONVERTING
            log.info("Extraction stage started", stage=stage.value)
            converted = convert_to_text(markup, video_id, self.download_dir, self.config.tools, self.runner, self.fs)

            stage = ExtractionStage.FINALIZING
            log.info("Extraction stage started", stage=stage.value)
            saved_path = finalize_transcript(self.fs, converted.artifact.path, converted.text, save_to_file)

            stage = ExtractionStage.DONE
            log.info("Extraction completed", saved_path=saved_path, char_count=len(converted.text))
            return ExtractionResult.succeeded(video_id, converted.text, saved_path)

        except ExtractionError as e:
            log.error("Extraction failed", stage=stage.value, error_type=type(e).__name__, error=str(e))
            self._clean_up_after_failure(stage, video_id, save_to_file)
            return ExtractionResult.failed(str(e), stage)

        except Exception as e:
            log.exception("Unexpected error occurred", stage=stage.value)
            self._clean_up_after_failure(stage, video_id, save_to_file)
            return ExtractionResult.failed(f"Unexpected error: {e}", stage)

    def _clean_up_after_failure(self, stage: ExtractionStage, video_id: Optional[str], save_to_file: bool) -> None:
        if video_id is None:
            return

        try:
            if stage in _ARTIFACT_STAGES:
                remove_transient_artifacts(self.fs, self.download_dir, video_id)
            if not save_to_file:
                self.fs.remove_if_exists(text_path(self.download_dir, video_id))
        except ExtractionError as e:
            logger.warning("Cleanup after failure incomplete", video_id=video_id, error=str(e))
