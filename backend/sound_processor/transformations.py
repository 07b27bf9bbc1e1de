"""
Audio Transformation Engine
===========================
Mute, mix and speed-change transformations over mono sample buffers.

Every transformation takes buffers by value and returns a new ``float64``
array; inputs are never modified. Time arguments are in seconds and are
mapped to frame indices with ``floor(seconds * sample_rate)``.
"""

import logging
import math
import sys

import numpy as np

logger = logging.getLogger(__name__)


class Converter:
    """
    Applies transformations to sample buffers at a fixed sample rate.

    Usage:
        converter = Converter(sample_rate=44100)
        muted = converter.apply_mute(audio, 1.0, 2.5)
        mixed = converter.apply_mix(muted, background, offset_seconds=3)
        faster = converter.apply_speed_up(mixed, 1.25)
    """

    def __init__(self, sample_rate: int = 44100):
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        self.sample_rate = sample_rate

    def seconds_to_frame(self, seconds: float) -> int:
        """
        Map a time in seconds to the frame index that contains it.

        Times too large to represent saturate at +/- sys.maxsize; callers
        clamp the result to the buffer.
        """
        position = seconds * self.sample_rate
        if math.isnan(position):
            raise ValueError(f"Time must be a number, got {seconds}")
        if position >= sys.maxsize:
            return sys.maxsize
        if position <= -sys.maxsize:
            return -sys.maxsize
        return int(math.floor(position))

    def apply_mute(
        self,
        buffer: np.ndarray,
        start_seconds: float,
        end_seconds: float
    ) -> np.ndarray:
        """
        Silence the window [start_seconds, end_seconds).

        The window is clamped to the buffer; an empty or inverted window
        returns an unchanged copy.

        Args:
            buffer: Input mono audio
            start_seconds: Window start (inclusive)
            end_seconds: Window end (exclusive)

        Returns:
            New buffer of the same length as the input
        """
        result = np.array(buffer, dtype=np.float64, copy=True)

        start_frame = max(self.seconds_to_frame(start_seconds), 0)
        end_frame = min(self.seconds_to_frame(end_seconds), result.size)

        if start_frame < end_frame:
            result[start_frame:end_frame] = 0.0
            logger.debug(f"Muted frames {start_frame}-{end_frame}")

        return result

    def apply_mix(
        self,
        primary: np.ndarray,
        secondary: np.ndarray,
        offset_seconds: float = 0
    ) -> np.ndarray:
        """
        Average ``secondary`` into ``primary`` from ``offset_seconds`` onward.

        Frame ``f`` of the result is ``(primary[f] + secondary[f]) / 2`` when
        ``f`` is at or past the offset and ``primary[f] / 2`` before it, so the
        unmixed prefix is halved as well. Frames of ``secondary`` are aligned
        with the same frame index of ``primary``, not shifted by the offset.
        Where ``secondary`` is shorter than ``primary`` the missing frames
        read as silence.

        Args:
            primary: Main buffer; defines the output length
            secondary: Buffer mixed in
            offset_seconds: Time from which secondary contributes

        Returns:
            New buffer with the length of ``primary``
        """
        primary = np.asarray(primary, dtype=np.float64)
        secondary = np.asarray(secondary, dtype=np.float64)
        length = primary.size

        offset_frame = max(self.seconds_to_frame(offset_seconds), 0)
        overlay_end = min(length, secondary.size)

        overlay = np.zeros(length, dtype=np.float64)
        if offset_frame < overlay_end:
            overlay[offset_frame:overlay_end] = secondary[offset_frame:overlay_end]

        if secondary.size < length:
            logger.warning(
                f"Mix source has {secondary.size} frames, main buffer has {length}; "
                f"padding with silence"
            )

        return (primary + overlay) / 2.0

    def apply_speed_up(self, buffer: np.ndarray, factor: float) -> np.ndarray:
        """
        Change playback speed by linear-interpolation resampling.

        Output frame ``i`` samples the input at ``t = i * factor``. Reads past
        the last input frame use the last input frame.

        Args:
            buffer: Input mono audio
            factor: Speed factor (> 1 = faster and shorter, < 1 = slower and longer)

        Returns:
            New buffer of length ``floor(len(buffer) / factor)``

        Raises:
            ValueError: If factor is not a positive finite number
        """
        if not math.isfinite(factor) or factor <= 0:
            raise ValueError(f"Speed factor must be a positive number, got {factor}")

        audio = np.asarray(buffer, dtype=np.float64)
        scaled_length = audio.size / factor
        if not math.isfinite(scaled_length) or scaled_length >= sys.maxsize:
            raise ValueError(f"Speed factor {factor} gives an output too long to represent")
        output_length = int(math.floor(scaled_length))
        if audio.size == 0 or output_length == 0:
            return np.zeros(0, dtype=np.float64)

        t = np.arange(output_length, dtype=np.float64) * factor
        int_t = np.floor(t).astype(np.int64)
        fraction = t - int_t

        last = audio.size - 1
        left = audio[np.minimum(int_t, last)]
        right = audio[np.minimum(int_t + 1, last)]

        logger.debug(f"Resampled {audio.size} -> {output_length} frames (x{factor})")
        return (1.0 - fraction) * left + fraction * right
