import numpy as np
import pytest

from perceptomap.analysis import FFT_SIZE, MEL_BANDS, SpectrogramMode
from perceptomap.colours import ColourScheme
from perceptomap.spectrogram import AxisTick, Spectrogram


def _sine(rate=48000.0, freq=1000.0, count=FFT_SIZE):
    t = np.arange(count) / rate
    return 0.5 * np.sin(2.0 * np.pi * freq * t)


def _small(**kwargs):
    return Spectrogram(48000.0, 16, 32, **kwargs)


def test_tick_without_data_draws_nothing():
    spec = _small()
    assert spec.tick() is False
    assert not spec.image.any()
    assert len(spec.db_buffer) == 0


def test_partial_frame_is_not_ready():
    spec = _small()
    spec.push_block(_sine(count=FFT_SIZE - 1))
    assert spec.tick() is False


def test_full_frame_draws_rightmost_column():
    spec = _small()
    spec.push_block(_sine())
    assert spec.tick() is True
    assert spec.image[:, -1].any()
    assert not spec.image[:, :-1].any()
    assert len(spec.db_buffer) == 1
    assert spec.db_buffer[0].size == spec.height
    assert spec.db_buffer[0].max() <= 0.0
    assert spec.db_buffer[0].min() >= -100.0


def test_frozen_holds_frame_until_resumed():
    spec = _small()
    spec.frozen = True
    spec.push_block(_sine())
    assert spec.tick() is False
    spec.frozen = False
    assert spec.tick() is True
    assert spec.tick() is False


def test_draw_scrolls_left():
    spec = _small()
    spec.push_block(_sine())
    spec.tick()
    first = spec.image[:, -1].copy()
    spec.push_block(np.zeros(FFT_SIZE))
    spec.tick()
    assert np.array_equal(spec.image[:, -2], first)
    assert not spec.image[:, -1].any()


def test_db_buffer_capped_at_width():
    spec = Spectrogram(48000.0, 4, 8)
    for _ in range(10):
        spec.draw_next_line()
    assert len(spec.db_buffer) == 4


def test_resize_sets_shape_and_rejects_bad_sizes():
    spec = _small()
    spec.resize(20, 10)
    assert spec.image.shape == (10, 20, 3)
    with pytest.raises(ValueError):
        spec.resize(0, 10)
    with pytest.raises(ValueError):
        spec.resize(10, 1)


def test_colour_for_value_uses_scheme():
    spec = _small(colour_scheme=ColourScheme.GRAYSCALE)
    assert spec.colour_for_value(1.0) == (255, 255, 255)
    assert spec.colour_for_value(0.0) == (0, 0, 0)


def test_log_axis_ticks_stop_below_nyquist():
    spec = Spectrogram(44100.0, 16, 512)
    labels = [tick.label for tick in spec.axis_ticks()]
    assert labels == [
        "30 Hz", "64 Hz", "128 Hz", "256 Hz", "512 Hz", "1024 Hz",
        "2048 Hz", "4096 Hz", "8192 Hz", "16384 Hz",
    ]
    ys = [tick.y for tick in spec.axis_ticks()]
    assert ys[0] == spec.height - 1
    assert ys == sorted(ys, reverse=True)


def test_linear_axis_ticks():
    spec = _small(use_log_frequency=False)
    ticks = spec.axis_ticks()
    assert len(ticks) == 6
    assert ticks[0] == AxisTick(spec.height - 1, "0.0 kHz")
    assert ticks[-1].label == "24.0 kHz"


def test_mfcc_axis_ticks():
    spec = _small(mode=SpectrogramMode.MFCC)
    ticks = spec.axis_ticks()
    assert ticks[0] == AxisTick(spec.height - 1, "MFCC 0")
    assert ticks[-1] == AxisTick(0, "MFCC 19")


def test_mel_axis_ticks_start_at_zero_and_rise():
    spec = _small(mode=SpectrogramMode.MEL)
    ticks = spec.axis_ticks()
    assert ticks[0].label == "0 Hz"
    assert ticks[-1].label.endswith("kHz")
    ys = [tick.y for tick in ticks]
    assert ys == sorted(ys, reverse=True)


def test_time_grid():
    spec = _small()
    grid = spec.time_grid(700)
    assert len(grid) == 8
    assert grid[0] == 700
    assert grid[-1] == 0
    assert grid == sorted(grid, reverse=True)


def test_hover_outside_or_empty_is_none():
    spec = _small()
    assert spec.hover_text(5, 5, 100, 100) is None
    spec.draw_next_line()
    assert spec.hover_text(-1, 5, 100, 100) is None
    assert spec.hover_text(5, 100, 100, 100) is None
    assert spec.hover_text(0, 5, 100, 100) is None


def test_hover_linear_top_is_nyquist():
    spec = _small(use_log_frequency=False)
    spec.push_block(_sine())
    spec.tick()
    text = spec.hover_text(99, 0, 100, 100)
    assert text.startswith("24000.0 Hz, ")
    assert text.endswith(" dB")


def test_hover_log_mode_reports_frequency():
    spec = _small()
    spec.push_block(_sine())
    spec.tick()
    text = spec.hover_text(99, 50, 100, 100)
    assert " Hz, " in text
    assert text.endswith(" dB")


def test_mel_draw_records_band_frequencies_and_hover():
    spec = _small(mode=SpectrogramMode.MEL)
    spec.push_block(_sine())
    spec.tick()
    assert spec.mel_band_frequencies.size == MEL_BANDS
    assert spec.mel_band_frequencies[0] == pytest.approx(0.0)
    assert spec.mel_band_frequencies[-1] == pytest.approx(24000.0)
    text = spec.hover_text(99, 0, 100, 100)
    assert text.startswith("24000.0 Hz, ")


def test_mfcc_hover_is_normalised():
    spec = _small(mode=SpectrogramMode.MFCC)
    spec.push_block(_sine())
    spec.tick()
    text = spec.hover_text(99, 99, 100, 100)
    assert text.startswith("MFCC 0, ")
    assert text.endswith(" (normalized)")
    value = float(text.split(", ")[1].split(" ")[0])
    assert 0.0 <= value <= 1.0