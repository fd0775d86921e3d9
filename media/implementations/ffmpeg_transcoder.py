"""
FFmpeg Transcoder Implementation

Real decode/encode primitives using ffmpeg and ffprobe subprocesses.

Every invocation is bounded by a timeout; a hung decoder surfaces as a
TranscodeError instead of stalling the pipeline.
"""

import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import List

from config.settings import TRANSFORM_TIMEOUT_SECONDS
from media.constants import CRF_BEST, CRF_WORST
from media.interfaces.transcoder_interface import TranscodeError, TranscoderInterface

# ffmpeg JPEG quantizer range (-q:v): 2 is best, 31 is worst
JPEG_QSCALE_BEST = 2
JPEG_QSCALE_WORST = 31


def quality_to_crf(quality: float) -> int:
    """
    Map a 0..1 quality to an x264 CRF value.

    Example:
        quality_to_crf(1.0)  # 18
        quality_to_crf(0.1)  # 48
    """
    return round(CRF_WORST - quality * (CRF_WORST - CRF_BEST))


def quality_to_qscale(quality: float) -> int:
    """Map a 0..1 quality to an ffmpeg JPEG -q:v value"""
    return round(JPEG_QSCALE_WORST - quality * (JPEG_QSCALE_WORST - JPEG_QSCALE_BEST))


class FFmpegTranscoder(TranscoderInterface):
    """
    Transcoder backed by the ffmpeg/ffprobe command line tools.

    Usage:
        transcoder = FFmpegTranscoder()
        duration = transcoder.probe_duration(Path("clip.mp4"))
        transcoder.compress(Path("clip.mp4"), Path("small.mp4"), quality=0.4)
    """

    def __init__(
        self,
        ffmpeg_binary: str = "ffmpeg",
        ffprobe_binary: str = "ffprobe",
        timeout: float = TRANSFORM_TIMEOUT_SECONDS,
    ):
        """
        Initialize FFmpeg transcoder.

        Args:
            ffmpeg_binary: ffmpeg executable name or path
            ffprobe_binary: ffprobe executable name or path
            timeout: Max seconds for any single invocation
        """
        self.logger = logging.getLogger(__name__)
        self.ffmpeg_binary = ffmpeg_binary
        self.ffprobe_binary = ffprobe_binary
        self.timeout = timeout

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        """
        Run one ffmpeg/ffprobe command.

        Raises:
            TranscodeError: If the binary is missing, times out or fails
        """
        self.logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise TranscodeError(f"{cmd[0]} not found in PATH") from e
        except subprocess.TimeoutExpired as e:
            raise TranscodeError(f"{cmd[0]} timeout after {self.timeout}s") from e

        if result.returncode != 0:
            error_msg = result.stderr.strip() if result.stderr else "unknown error"
            raise TranscodeError(
                f"{cmd[0]} failed (exit {result.returncode}): {error_msg}",
            )

        return result

    @staticmethod
    def _check_output(output: Path) -> Path:
        if not output.exists() or output.stat().st_size == 0:
            raise TranscodeError(f"No output written to {output}")
        return output

    def probe_duration(self, source: Path) -> float:
        result = self._run(
            [
                self.ffprobe_binary,
                "-v", "error",
                "-show_entries", "format=duration",
                "-of", "json",
                str(source),
            ],
        )

        try:
            data = json.loads(result.stdout)
            duration = float(data["format"]["duration"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise TranscodeError(f"No duration reported for {source.name}") from e

        if duration < 0:
            raise TranscodeError(f"Negative duration reported for {source.name}")

        return duration

    def compress(self, source: Path, output: Path, quality: float) -> Path:
        # Keep dimensions even (x264 requirement) and at least 2 px
        scale = (
            f"scale='max(2,trunc(iw*{quality:.4f}/2)*2)'"
            f":'max(2,trunc(ih*{quality:.4f}/2)*2)'"
        )
        self._run(
            [
                self.ffmpeg_binary,
                "-y",
                "-v", "error",
                "-i", str(source),
                "-vf", scale,
                "-c:v", "libx264",
                "-preset", "veryfast",
                "-crf", str(quality_to_crf(quality)),
                "-c:a", "aac",
                "-movflags", "+faststart",
                str(output),
            ],
        )
        return self._check_output(output)

    def extract_frame(
        self,
        source: Path,
        output: Path,
        at_seconds: float,
        width: int,
        height: int,
        quality: float,
    ) -> Path:
        self._run(
            [
                self.ffmpeg_binary,
                "-y",
                "-v", "error",
                "-ss", f"{at_seconds:.3f}",
                "-i", str(source),
                "-frames:v", "1",
                "-s", f"{width}x{height}",
                "-q:v", str(quality_to_qscale(quality)),
                str(output),
            ],
        )
        return self._check_output(output)

    def is_available(self) -> bool:
        return (
            shutil.which(self.ffmpeg_binary) is not None
            and shutil.which(self.ffprobe_binary) is not None
        )
