"""Audio processor that passes audio through and feeds the spectrogram editor."""

from __future__ import annotations

from enum import Enum

import numpy as np

from perceptomap.editor import Editor

PLUGIN_NAME = "PerceptoMap"


class ChannelSet(Enum):
    """Bus layouts; the value is the number of channels."""

    DISABLED = 0
    MONO = 1
    STEREO = 2


class SpectrogramProcessor:
    """Pass-through effect that forwards its first channel to an open editor."""

    name = PLUGIN_NAME
    accepts_midi = False
    produces_midi = False
    is_midi_effect = False
    tail_length_seconds = 0.0
    num_programs = 1
    current_program = 0
    has_editor = True

    def __init__(
        self,
        input_set: ChannelSet = ChannelSet.STEREO,
        output_set: ChannelSet = ChannelSet.STEREO,
    ) -> None:
        self.input_set = input_set
        self.output_set = output_set
        self.sample_rate = 0.0
        self.block_size = 0
        self.active_editor: Editor | None = None

    def create_editor(self) -> Editor:
        """Open an editor for this processor and make it the active one."""
        self.active_editor = Editor(self)
        return self.active_editor

    def prepare(self, sample_rate: float, block_size: int) -> None:
        """Get ready to play at the given rate, passing the rate to the editor."""
        self.sample_rate = float(sample_rate)
        self.block_size = int(block_size)
        if self.active_editor is not None:
            self.active_editor.spectrogram.sample_rate = self.sample_rate

    def is_layout_supported(self, input_set: ChannelSet, output_set: ChannelSet) -> bool:
        """Accept mono or stereo output matching the input."""
        if output_set not in (ChannelSet.MONO, ChannelSet.STEREO):
            return False
        return output_set == input_set

    def process_block(self, channels) -> np.ndarray:
        """Clear unused output channels, forward channel 0 to the editor, return the audio."""
        buffer = np.array(channels, dtype=float, ndmin=2)
        if buffer.ndim != 2 or buffer.shape[0] == 0:
            raise ValueError("channels must be a non-empty sequence of sample rows")

        buffer[self.input_set.value:self.output_set.value] = 0.0

        if self.active_editor is not None:
            self.active_editor.spectrogram.push_block(buffer[0])
        return buffer