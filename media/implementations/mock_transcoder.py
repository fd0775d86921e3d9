"""
Mock Transcoder Implementation

Simulated decode/encode for testing without ffmpeg.

This is a "Fake" (test double) - it writes real files with predictable
sizes so the pipeline's file handling runs for real.
"""

import logging
from pathlib import Path
from typing import List, Optional, Set

from media.constants import TransformStep
from media.interfaces.transcoder_interface import TranscodeError, TranscoderInterface

# JPEG SOI/EOI markers so fake thumbnails look like JPEGs
FAKE_JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 64 + b"\xff\xd9"


class MockTranscoder(TranscoderInterface):
    """
    Mock transcoder for testing.

    Usage:
        transcoder = MockTranscoder(duration=12.5)
        transcoder.fail_on(TransformStep.THUMBNAIL)
    """

    def __init__(
        self,
        duration: Optional[float] = 10.0,
        output_size: Optional[int] = None,
    ):
        """
        Initialize mock transcoder.

        Args:
            duration: Reported duration, or None to fail probing
            output_size: Fixed compressed output size in bytes.
                         None = source size scaled by quality squared
                         (both dimensions scaled by quality).
        """
        self.logger = logging.getLogger(__name__)
        self.duration = duration
        self.output_size = output_size

        self._failing_steps: Set[TransformStep] = set()
        self.calls: List[dict] = []

        self.logger.info(f"Mock Transcoder initialized (duration: {duration})")

    # =========================================================================
    # TEST CONFIGURATION
    # =========================================================================

    def fail_on(self, *steps: TransformStep) -> None:
        """Make the given steps raise TranscodeError"""
        self._failing_steps.update(steps)

    def reset(self) -> None:
        """Clear failures and call history"""
        self._failing_steps.clear()
        self.calls.clear()

    def calls_for(self, step: TransformStep) -> List[dict]:
        return [call for call in self.calls if call["step"] == step]

    def _record(self, step: TransformStep, **details) -> None:
        self.calls.append({"step": step, **details})
        if step in self._failing_steps:
            self.logger.debug(f"[MOCK] Simulated {step.value} failure")
            raise TranscodeError(f"Simulated {step.value} failure")

    # =========================================================================
    # TRANSCODER INTERFACE
    # =========================================================================

    def probe_duration(self, source: Path) -> float:
        self._record(TransformStep.PROBE, source=source)
        if self.duration is None:
            raise TranscodeError(f"[MOCK] Cannot decode {source.name}")
        return self.duration

    def compress(self, source: Path, output: Path, quality: float) -> Path:
        self._record(TransformStep.COMPRESS, source=source, quality=quality)

        if self.output_size is not None:
            size = self.output_size
        else:
            size = max(1, int(source.stat().st_size * quality * quality))

        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "wb") as f:
            f.write(b"\x00\x00\x00\x20ftypmp42")  # MP4 header
            f.write(b"\x00" * max(0, size - 12))

        self.logger.debug(f"[MOCK] Compressed {source.name} -> {size} bytes")
        return output

    def extract_frame(
        self,
        source: Path,
        output: Path,
        at_seconds: float,
        width: int,
        height: int,
        quality: float,
    ) -> Path:
        self._record(
            TransformStep.THUMBNAIL,
            source=source,
            at_seconds=at_seconds,
            width=width,
            height=height,
            quality=quality,
        )
        output.write_bytes(FAKE_JPEG)
        return output

    def is_available(self) -> bool:
        return True
