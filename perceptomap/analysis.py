"""Spectral analysis: framing, FFT magnitudes and per-column intensity maps."""

from __future__ import annotations

from enum import Enum

import numpy as np

FFT_ORDER = 11
FFT_SIZE = 1 << FFT_ORDER
MEL_BANDS = 128
MFCC_COEFFS = 20
MFCC_MIN = -100.0
MFCC_MAX = 100.0
DB_FLOOR = -100.0
DB_CEILING = 0.0
LOG_MIN_FREQ = 30.0
_EPSILON = 1e-6


class SpectrogramMode(Enum):
    """Kinds of spectrogram that can be displayed."""

    LINEAR = 1
    MEL = 2
    MFCC = 3


def hz_to_mel(hz):
    """Convert frequency in Hz to mel (2595 * log10(1 + f / 700))."""
    return 2595.0 * np.log10(1.0 + np.asarray(hz, dtype=float) / 700.0)


def mel_to_hz(mel):
    """Convert mel back to frequency in Hz."""
    return 700.0 * (np.power(10.0, np.asarray(mel, dtype=float) / 2595.0) - 1.0)


def magnitude_spectrum(frame) -> np.ndarray:
    """Hann-window a frame and return its non-negative FFT magnitudes."""
    samples = np.asarray(frame, dtype=float)
    if samples.ndim != 1 or samples.size < 2:
        raise ValueError("frame must be a one-dimensional sequence of at least 2 samples")
    size = samples.size
    window = 0.5 - 0.5 * np.cos(2.0 * np.pi * np.arange(size) / (size - 1))
    window *= size / window.sum()
    return np.abs(np.fft.rfft(samples * window))


class FrameCollector:
    """Gathers incoming samples into FFT-sized frames.

    Once a frame is complete its spectrum is held until taken; samples that
    arrive in the meantime are dropped.
    """

    def __init__(self, fft_size: int = FFT_SIZE) -> None:
        if fft_size < 2:
            raise ValueError("fft_size must be at least 2")
        self.fft_size = fft_size
        self._fifo = np.zeros(fft_size)
        self._index = 0
        self._spectrum: np.ndarray | None = None

    @property
    def ready(self) -> bool:
        """True when a finished spectrum is waiting to be taken."""
        return self._spectrum is not None

    def push(self, samples) -> None:
        """Feed samples into the frame buffer."""
        data = np.asarray(samples, dtype=float).ravel()
        position = 0
        while position < data.size and not self.ready:
            count = min(self.fft_size - self._index, data.size - position)
            self._fifo[self._index:self._index + count] = data[position:position + count]
            self._index += count
            position += count
            if self._index == self.fft_size:
                self._spectrum = magnitude_spectrum(self._fifo)
                self._index = 0

    def take(self) -> np.ndarray | None:
        """Return the waiting spectrum and clear it, or None if none is ready."""
        spectrum, self._spectrum = self._spectrum, None
        return spectrum


def _check_spectrum(magnitudes) -> np.ndarray:
    spectrum = np.asarray(magnitudes, dtype=float)
    if spectrum.ndim != 1 or spectrum.size < 2:
        raise ValueError("magnitudes must be a one-dimensional spectrum of at least 2 bins")
    return spectrum


def _check_rate(sample_rate: float) -> float:
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive")
    return float(sample_rate)


def _check_height(height: int) -> int:
    if height < 2:
        raise ValueError("height must be at least 2")
    return int(height)


def _to_db(values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    db = np.clip(20.0 * np.log10(values + _EPSILON), DB_FLOOR, DB_CEILING)
    brightness = (db - DB_FLOOR) / (DB_CEILING - DB_FLOOR)
    return db, brightness


def mel_band_frequencies(sample_rate: float, bands: int = MEL_BANDS) -> np.ndarray:
    """Centre frequencies of evenly spaced mel bands from 0 Hz to Nyquist."""
    rate = _check_rate(sample_rate)
    if bands < 2:
        raise ValueError("bands must be at least 2")
    mel_min = hz_to_mel(0.0)
    mel_max = hz_to_mel(rate / 2.0)
    mels = mel_min + (mel_max - mel_min) * np.arange(bands) / (bands - 1)
    return mel_to_hz(mels)


def mel_energies(magnitudes, sample_rate: float, bands: int = MEL_BANDS) -> np.ndarray:
    """Sample the spectrum at each mel band's centre frequency."""
    spectrum = _check_spectrum(magnitudes)
    max_hz = _check_rate(sample_rate) / 2.0
    half = spectrum.size - 1
    freqs = mel_band_frequencies(sample_rate, bands)
    bins = np.clip((freqs / max_hz * half).astype(int), 0, half - 1)
    return spectrum[bins]


def linear_column(magnitudes, sample_rate: float, height: int,
                  log_frequency: bool = True) -> tuple[np.ndarray, np.ndarray]:
    """dB values and brightness for one STFT column, top row highest frequency."""
    spectrum = _check_spectrum(magnitudes)
    max_freq = _check_rate(sample_rate) / 2.0
    rows = _check_height(height)
    half = spectrum.size - 1

    frac = 1.0 - np.arange(rows) / rows
    if log_frequency:
        log_min = np.log10(LOG_MIN_FREQ)
        log_max = np.log10(max_freq)
        freqs = np.power(10.0, log_min + frac * (log_max - log_min))
        bins = (freqs / max_freq * half).astype(int)
    else:
        bins = (frac * half).astype(int)
    bins = np.clip(bins, 0, half - 1)
    return _to_db(spectrum[bins])


def mel_column(magnitudes, sample_rate: float, height: int,
               bands: int = MEL_BANDS) -> tuple[np.ndarray, np.ndarray]:
    """dB values and brightness for one mel column, top row highest band."""
    energies = mel_energies(magnitudes, sample_rate, bands)
    rows = _check_height(height)
    y = np.arange(rows)
    indices = np.clip((bands - 1) - (y * (bands - 1)) // (rows - 1), 0, bands - 1)
    return _to_db(energies[indices])


def mfcc_column(magnitudes, sample_rate: float, height: int, bands: int = MEL_BANDS,
                coeffs: int = MFCC_COEFFS) -> tuple[np.ndarray, np.ndarray]:
    """Raw MFCC values and normalised brightness for one column, coefficient 0 at the bottom."""
    if coeffs < 1:
        raise ValueError("coeffs must be at least 1")
    energies = np.log(mel_energies(magnitudes, sample_rate, bands) + _EPSILON)
    rows = _check_height(height)

    k = np.arange(coeffs)[:, None]
    n = np.arange(bands)[None, :]
    mfcc = (energies[None, :] * np.cos(np.pi * k * (n + 0.5) / bands)).sum(axis=1)

    frac = np.arange(rows) / (rows - 1)
    indices = np.clip(((1.0 - frac) * (coeffs - 1)).astype(int), 0, coeffs - 1)
    values = mfcc[indices]
    brightness = (np.clip(values, MFCC_MIN, MFCC_MAX) - MFCC_MIN) / (MFCC_MAX - MFCC_MIN)
    return values, brightness