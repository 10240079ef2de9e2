"""Editor state: controls, legend and layout around a spectrogram view."""

from __future__ import annotations

import numpy as np

from perceptomap.analysis import SpectrogramMode
from perceptomap.colours import ColourScheme
from perceptomap.spectrogram import Spectrogram

DEFAULT_SIZE = (800, 600)
MIN_SIZE = (400, 300)
MAX_SIZE = (1600, 1400)
LEGEND_SIZE = (180, 20)
TOP_BAR_HEIGHT = 30
LEGEND_MARGIN = 40
_ROW_HEIGHT = 30
_FREEZE_WIDTH = 100
_BOX_WIDTH = 110
_INSET = 5


def legend_image(spectrogram: Spectrogram, width: int, height: int) -> np.ndarray:
    """A horizontal colour bar from intensity 0 (left) to 1 (right)."""
    if width < 2 or height < 1:
        raise ValueError("legend must be at least 2 pixels wide and 1 pixel high")
    row = np.array(
        [spectrogram.colour_for_value(x / (width - 1)) for x in range(width)],
        dtype=np.uint8,
    )
    return np.repeat(row[None, :, :], height, axis=0)


def _reduced(x: int, y: int, width: int, height: int) -> tuple[int, int, int, int]:
    return (x + _INSET, y + _INSET, width - 2 * _INSET, height - 2 * _INSET)


class Editor:
    """Holds the spectrogram and the state of the controls around it."""

    def __init__(self, processor=None) -> None:
        self.processor = processor
        self.spectrogram = Spectrogram()
        self.spectrogram.use_log_frequency = True
        rate = getattr(processor, "sample_rate", 0.0)
        if rate and rate > 0:
            self.spectrogram.sample_rate = float(rate)

        self.frozen = False
        self.freeze_button_text = "Freeze"
        self.colour_scheme = ColourScheme.CLASSIC
        self.mode = SpectrogramMode.LINEAR
        self.use_log_scale = True
        self.legend = legend_image(self.spectrogram, *LEGEND_SIZE)
        self.width, self.height = DEFAULT_SIZE
        self.bounds: dict[str, tuple[int, int, int, int]] = {}
        self.layout(*DEFAULT_SIZE)

    def _update_legend(self) -> None:
        self.legend = legend_image(self.spectrogram, *LEGEND_SIZE)

    def toggle_freeze(self) -> bool:
        """Freeze or resume scrolling; return the new frozen state."""
        self.frozen = not self.frozen
        self.freeze_button_text = "Resume" if self.frozen else "Freeze"
        self.spectrogram.frozen = self.frozen
        return self.frozen

    def select_colour_scheme(self, scheme: ColourScheme) -> None:
        """Use another colour map for the display and the legend."""
        self.colour_scheme = ColourScheme(scheme)
        self.spectrogram.colour_scheme = self.colour_scheme
        self._update_legend()

    def select_mode(self, mode: SpectrogramMode) -> None:
        """Switch between linear, mel and MFCC display."""
        self.mode = SpectrogramMode(mode)
        self.spectrogram.mode = self.mode
        self._update_legend()

    def select_log_scale(self, use_log: bool) -> None:
        """Choose a logarithmic or linear frequency axis."""
        self.use_log_scale = bool(use_log)
        self.spectrogram.use_log_frequency = self.use_log_scale

    def layout(self, width: int, height: int) -> dict[str, tuple[int, int, int, int]]:
        """Lay out the controls for a window size (clamped to the limits); return bounds."""
        width = min(max(int(width), MIN_SIZE[0]), MAX_SIZE[0])
        height = min(max(int(height), MIN_SIZE[1]), MAX_SIZE[1])
        self.width, self.height = width, height

        second_y = _ROW_HEIGHT
        bounds = {"freeze": _reduced(0, 0, _FREEZE_WIDTH, _ROW_HEIGHT)}
        for position, key in enumerate(("colour_scheme", "mode", "log_scale")):
            bounds[key] = _reduced(position * _BOX_WIDTH, second_y, _BOX_WIDTH, _ROW_HEIGHT)

        legend_w, legend_h = LEGEND_SIZE
        bounds["legend"] = (
            width - legend_w - LEGEND_MARGIN,
            (TOP_BAR_HEIGHT - legend_h) // 2,
            legend_w,
            legend_h,
        )

        top = 2 * _ROW_HEIGHT
        bounds["spectrogram"] = (0, top, width, height - top)
        self.spectrogram.resize(width, height - top)
        self.bounds = bounds
        return bounds

    def legend_labels(self) -> tuple[str, str]:
        """Texts at the low and high ends of the legend bar."""
        if self.spectrogram.mode is SpectrogramMode.MFCC:
            return ("0.0", "1.0")
        return ("-100 dB", "0 dB")