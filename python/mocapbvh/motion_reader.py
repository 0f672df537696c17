"""
MOTION section parser.

Reads the frame count and frame time declarations, then a whitespace
separated numeric stream sized by the channel count of the hierarchy.
"""

import logging
import numpy as np
from typing import List, Optional

from .config import ParserConfig
from .data_structs import Motion
from .errors import MotionFormatError, TruncatedMotionError

logger = logging.getLogger(__name__)

MOTION_KEYWORD = "MOTION"
FRAMES_LABEL = "FRAMES:"
FRAME_TIME_LABEL = "FRAME TIME:"


def is_motion_line(line: str) -> bool:
    return line.strip().upper() == MOTION_KEYWORD


def _label_value(line: str, label: str) -> Optional[str]:
    """Text following a case-insensitive label, None if the line lacks it"""
    stripped = line.strip()
    if stripped[:len(label)].upper() != label:
        return None
    return stripped[len(label):].strip()


class MotionReader:
    """Parser for the lines following the MOTION keyword"""

    def __init__(self, total_channels: int, config: ParserConfig = None, source: Optional[str] = None):
        """
        Initialize reader with the hierarchy's channel count.

        Args:
            total_channels: Per-frame vector length from the hierarchy
            config: Parser options
            source: Name used in error messages
        """
        self.total_channels = total_channels
        self.config = config or ParserConfig()
        self.source = source

    def read(self, lines: List[str], first_line: int = 1) -> List[Motion]:
        """
        Parse motion segments.

        Args:
            lines: Lines after the MOTION line
            first_line: 1-based line number of lines[0], for error messages

        Returns:
            List of Motion objects, one per Frames/Frame Time declaration
        """
        self._lines = lines
        self._first_line = first_line
        self._pos = 0
        motions = []
        trailing = 0

        while True:
            self._skip_blank()
            if self._pos >= len(lines):
                break
            if motions and is_motion_line(lines[self._pos]):
                self._pos += 1
            elif not motions or _label_value(lines[self._pos], FRAMES_LABEL) is not None:
                motion, excess = self._read_segment()
                motions.append(motion)
                trailing += excess
            else:
                trailing += len(lines[self._pos].split())
                self._pos += 1

        if not motions:
            raise MotionFormatError(f"missing {FRAMES_LABEL!r} declaration after MOTION",
                                    line=first_line, source=self.source)
        if trailing:
            if not self.config.ignore_trailing_data:
                raise MotionFormatError(f"{trailing} values after the last declared frame",
                                        source=self.source)
            logger.debug(f"Ignoring {trailing} values after the last declared frame")
        return motions

    def _line_no(self) -> int:
        return self._first_line + self._pos

    def _skip_blank(self):
        while self._pos < len(self._lines) and not self._lines[self._pos].strip():
            self._pos += 1

    def _read_label(self, label: str, convert, what: str):
        self._skip_blank()
        if self._pos >= len(self._lines):
            raise MotionFormatError(f"missing {label!r} declaration", line=self._line_no(), source=self.source)
        text = _label_value(self._lines[self._pos], label)
        if text is None:
            raise MotionFormatError(f"expected {label!r} declaration, found {self._lines[self._pos].strip()!r}",
                                    line=self._line_no(), source=self.source)
        try:
            value = convert(text)
        except ValueError:
            raise MotionFormatError(f"invalid {what} {text!r}", line=self._line_no(),
                                    source=self.source) from None
        self._pos += 1
        return value

    def _read_segment(self):
        frame_count = self._read_label(FRAMES_LABEL, int, "frame count")
        if frame_count < 0:
            raise MotionFormatError(f"negative frame count {frame_count}", line=self._line_no() - 1,
                                    source=self.source)
        frame_time = self._read_label(FRAME_TIME_LABEL, float, "frame time")
        if frame_time <= 0:
            raise MotionFormatError(f"frame time must be positive, got {frame_time}", line=self._line_no() - 1,
                                    source=self.source)

        needed = frame_count * self.total_channels
        values = []
        excess = 0
        while len(values) < needed and self._pos < len(self._lines):
            fields = self._lines[self._pos].split()
            for i, field in enumerate(fields):
                if len(values) == needed:
                    excess = len(fields) - i
                    break
                try:
                    values.append(float(field))
                except ValueError:
                    raise MotionFormatError(f"invalid motion value {field!r}", line=self._line_no(),
                                            source=self.source) from None
            self._pos += 1

        if len(values) < needed:
            raise TruncatedMotionError(
                f"expected {needed} values ({frame_count} frames x {self.total_channels} channels), "
                f"found {len(values)}",
                line=self._line_no(), source=self.source,
            )

        data = np.array(values, dtype=np.float64).reshape(frame_count, self.total_channels)
        logger.debug(f"Read motion segment: {frame_count} frames, frame time {frame_time}")
        return Motion(frame_time=frame_time, values=data), excess
