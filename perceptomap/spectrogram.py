"""Scrolling spectrogram image with axis ticks and hover read-outs."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass

import numpy as np

from perceptomap.analysis import (
    FFT_SIZE,
    LOG_MIN_FREQ,
    MEL_BANDS,
    MFCC_COEFFS,
    MFCC_MAX,
    MFCC_MIN,
    FrameCollector,
    SpectrogramMode,
    linear_column,
    mel_band_frequencies,
    mel_column,
    mfcc_column,
)
from perceptomap.colours import RGB, ColourScheme, colour_for_value

NUM_LABELS = 10
NUM_LINEAR_LABELS = 6
NUM_TIME_LABELS = 8
LOG_LABEL_FREQS = (30, 64, 128, 256, 512, 1024, 2048, 4096, 8192, 16384, 32768)


@dataclass(frozen=True)
class AxisTick:
    """A labelled horizontal grid line at an image row."""

    y: int
    label: str


def _frequency_label(freq: float) -> str:
    if freq >= 1000.0:
        return f"{freq / 1000.0:.1f} kHz"
    return f"{int(freq)} Hz"


class Spectrogram:
    """A spectrogram image that scrolls left by one column per analysed frame."""

    def __init__(
        self,
        sample_rate: float = 44100.0,
        width: int = FFT_SIZE,
        height: int = FFT_SIZE // 2,
        *,
        mode: SpectrogramMode = SpectrogramMode.LINEAR,
        colour_scheme: ColourScheme = ColourScheme.CLASSIC,
        use_log_frequency: bool = True,
        fft_size: int = FFT_SIZE,
    ) -> None:
        self.sample_rate = float(sample_rate)
        self.mode = mode
        self.colour_scheme = colour_scheme
        self.use_log_frequency = use_log_frequency
        self.frozen = False
        self._collector = FrameCollector(fft_size)
        self._spectrum = np.zeros(fft_size // 2 + 1)
        self.mel_band_frequencies: np.ndarray = np.empty(0)
        self.image = np.zeros((0, 0, 3), dtype=np.uint8)
        self.db_buffer: deque[np.ndarray] = deque()
        self.resize(width, height)

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    def push_block(self, samples) -> None:
        """Feed a block of audio samples to the analyser."""
        self._collector.push(samples)

    def tick(self) -> bool:
        """Draw a new column if a frame is ready and not frozen; return whether one was drawn."""
        if self.frozen or not self._collector.ready:
            return False
        self.draw_next_line()
        return True

    def resize(self, width: int, height: int) -> None:
        """Replace the image with a blank one of the given size."""
        if width < 1 or height < 2:
            raise ValueError("image must be at least 1 pixel wide and 2 pixels high")
        self.image = np.zeros((int(height), int(width), 3), dtype=np.uint8)

    def draw_next_line(self) -> None:
        """Scroll the image left and draw the latest spectrum in the rightmost column."""
        spectrum = self._collector.take()
        if spectrum is not None:
            self._spectrum = spectrum

        rows = self.height
        if self.mode is SpectrogramMode.MEL:
            self.mel_band_frequencies = mel_band_frequencies(self.sample_rate, MEL_BANDS)
            values, brightness = mel_column(self._spectrum, self.sample_rate, rows, MEL_BANDS)
        elif self.mode is SpectrogramMode.MFCC:
            values, brightness = mfcc_column(
                self._spectrum, self.sample_rate, rows, MEL_BANDS, MFCC_COEFFS
            )
        else:
            values, brightness = linear_column(
                self._spectrum, self.sample_rate, rows, self.use_log_frequency
            )

        self.image[:, :-1] = self.image[:, 1:]
        self.image[:, -1] = [self.colour_for_value(b) for b in brightness]

        while len(self.db_buffer) >= self.width:
            self.db_buffer.popleft()
        self.db_buffer.append(np.asarray(values, dtype=float))

    def colour_for_value(self, value: float) -> RGB:
        """Colour of a normalised intensity in the current scheme."""
        return colour_for_value(value, self.colour_scheme)

    def axis_ticks(self) -> list[AxisTick]:
        """Frequency (or coefficient) ticks for the vertical axis."""
        rows = self.height
        max_freq = self.sample_rate / 2.0

        if self.mode is SpectrogramMode.MEL:
            ticks = []
            mel_top = 2595.0 * math.log10(1.0 + max_freq / 700.0)
            for i in range(NUM_LABELS):
                norm = i / (NUM_LABELS - 1)
                freq = 700.0 * (10.0 ** (norm * mel_top / 2595.0) - 1.0)
                ticks.append(AxisTick(rows - 1 - int(norm * rows), _frequency_label(freq)))
            return ticks

        if self.mode is SpectrogramMode.MFCC:
            ticks = []
            for i in range(NUM_LABELS):
                frac = i / (NUM_LABELS - 1)
                coeff = int(frac * (MFCC_COEFFS - 1))
                ticks.append(AxisTick(int((1.0 - frac) * (rows - 1)), f"MFCC {coeff}"))
            return ticks

        if self.use_log_frequency:
            log_min = math.log10(LOG_LABEL_FREQS[0])
            log_max = math.log10(max_freq)
            ticks = []
            for freq in LOG_LABEL_FREQS:
                if freq >= max_freq:
                    break
                norm = (math.log10(freq) - log_min) / (log_max - log_min)
                ticks.append(AxisTick(rows - 1 - int(norm * rows), f"{freq} Hz"))
            return ticks

        ticks = []
        for i in range(NUM_LINEAR_LABELS):
            norm = i / (NUM_LINEAR_LABELS - 1)
            freq = norm * max_freq
            ticks.append(AxisTick(rows - 1 - int(norm * rows), f"{freq / 1000.0:.1f} kHz"))
        return ticks

    def time_grid(self, width: int) -> list[int]:
        """X positions of the vertical time grid lines, right to left."""
        return [
            width - int(i / (NUM_TIME_LABELS - 1) * width) for i in range(NUM_TIME_LABELS)
        ]

    def hover_text(self, x: int, y: int, width: int, height: int) -> str | None:
        """Read-out for a pointer at (x, y) in a view of the given size, or None."""
        if not (0 <= x < width and 0 <= y < height):
            return None

        img_w, img_h = self.width, self.height
        img_x = min(max(img_w - 1 - (x * img_w // width), 0), img_w - 1)
        img_y = min(max(y * img_h // height, 0), img_h - 1)

        count = len(self.db_buffer)
        if img_x >= count:
            return None
        column = self.db_buffer[count - 1 - img_x]
        if img_y >= column.size:
            return None
        value = float(column[img_y])
        max_freq = self.sample_rate / 2.0

        if self.mode is SpectrogramMode.MEL:
            freqs = self.mel_band_frequencies
            if freqs.size == 0:
                freqs = mel_band_frequencies(self.sample_rate, MEL_BANDS)
            index = min(max(int(img_y / height * freqs.size), 0), freqs.size - 1)
            freq = float(freqs[freqs.size - 1 - index])
            return f"{freq:.1f} Hz, {value:.1f} dB"

        if self.mode is SpectrogramMode.MFCC:
            frac = img_y / (img_h - 1)
            coeff = min(max(int((1.0 - frac) * (MFCC_COEFFS - 1)), 0), MFCC_COEFFS - 1)
            norm = min(max(value, MFCC_MIN), MFCC_MAX)
            brightness = (norm - MFCC_MIN) / (MFCC_MAX - MFCC_MIN)
            return f"MFCC {coeff}, {brightness:.2f} (normalized)"

        if self.use_log_frequency:
            log_min = math.log10(LOG_MIN_FREQ)
            log_max = math.log10(max_freq)
            freq = 10.0 ** (log_min + (1.0 - img_y / height) * (log_max - log_min))
        else:
            freq = (1.0 - img_y / height) * max_freq
        return f"{freq:.1f} Hz, {value:.1f} dB"