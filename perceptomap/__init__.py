"""Scrolling spectrogram, mel-spectrogram and MFCC analysis of audio blocks."""

__version__ = "0.1.0"

__all__ = ["analysis", "colours", "editor", "processor", "spectrogram"]