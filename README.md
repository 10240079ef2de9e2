# perceptomap

perceptomap is a spectrogram analyser for audio that arrives in blocks. You feed it blocks of samples.
It gathers them into FFT frames of 2048 samples, applies a Hann window to each frame, and turns each
frame into one column of a scrolling RGB image held as a numpy array. Each column can show one of
three things:

- a linear STFT spectrogram, with a linear or logarithmic frequency axis starting at 30 Hz;
- a mel-spectrogram with 128 mel bands;
- an MFCC display with 20 coefficients.

## Installation

```
pip install .
```

numpy is the only runtime dependency. To run the tests, install the `test` extra:

```
pip install ".[test]"
pytest
```

## Modules

- `perceptomap.colours`
  - `ColourScheme` (`CLASSIC`, `MAGMA`, `GRAYSCALE`).
  - `colour_for_value(value, scheme)` clamps a brightness to `[0, 1]` and returns an 8-bit `(r, g, b)` tuple.
  - `hsv_to_rgb(hue, saturation, value)`.
- `perceptomap.analysis`
  - `SpectrogramMode` (`LINEAR`, `MEL`, `MFCC`).
  - `hz_to_mel` and `mel_to_hz`, using `2595 * log10(1 + f / 700)`.
  - `magnitude_spectrum(frame)` returns the FFT magnitudes of a Hann-windowed frame.
  - `FrameCollector` collects samples into frames. Once a frame is complete, its spectrum waits until `take()` is called. Samples pushed in the meantime are dropped.
  - `mel_band_frequencies` and `mel_energies`.
  - The column builders `linear_column`, `mel_column` and `mfcc_column`. Each returns a pair of arrays: the values (dB, or raw MFCC values) and the brightness in `[0, 1]`.
- `perceptomap.spectrogram`
  - `Spectrogram` holds the scrolling image (`image`) and the history of column values (`db_buffer`).
  - `push_block` feeds audio to the analyser.
  - `tick` draws a column when a frame is ready and the view is not frozen.
  - `resize` replaces the image with a blank one of the given size.
  - `axis_ticks` returns `AxisTick(y, label)` entries for the vertical axis.
  - `time_grid(width)` returns the x positions of the vertical grid lines.
  - `hover_text(x, y, width, height)` returns the readout for a pointer position, or `None`.
- `perceptomap.processor`
  - `SpectrogramProcessor` is a pass-through processor.
  - `process_block(channels)` clears unused output channels and returns the audio. It forwards channel 0 to the spectrogram of the editor opened with `create_editor()`.
  - `prepare(sample_rate, block_size)` passes the sample rate on to that editor.
  - `is_layout_supported` accepts only mono or stereo output that matches the input. `ChannelSet` describes these layouts.
- `perceptomap.editor`
  - `Editor` holds the state of the controls: `toggle_freeze`, `select_colour_scheme`, `select_mode` and `select_log_scale`.
  - `layout(width, height)` clamps the size to between 400×300 and 1600×1400. It returns the bounds of each control and resizes the spectrogram image.
  - `legend_labels` returns the texts for the two ends of the colour legend.
  - `legend_image(spectrogram, width, height)` renders the legend bar as an array.

## Example

```python
import numpy as np

from perceptomap.analysis import SpectrogramMode
from perceptomap.colours import ColourScheme
from perceptomap.processor import SpectrogramProcessor

processor = SpectrogramProcessor()
editor = processor.create_editor()
processor.prepare(48000.0, 512)

editor.select_colour_scheme(ColourScheme.MAGMA)
editor.select_mode(SpectrogramMode.MEL)

t = np.arange(48000) / 48000.0
tone = np.sin(2 * np.pi * 1000.0 * t)
for start in range(0, len(tone), 512):
    processor.process_block([tone[start:start + 512]])
    editor.spectrogram.tick()

for tick in editor.spectrogram.axis_ticks():
    print(tick)
print(editor.legend_labels())
```

Each call to `tick()` adds at most one column, and only when a complete frame is waiting.
`Editor.toggle_freeze()` stops the image from scrolling. While the view is frozen, the waiting frame is
not drawn, and any audio pushed after it is dropped.

## What it does not do

perceptomap computes images, labels, layout rectangles and readout texts. It does not:

- open a window or draw anything on screen;
- capture or play audio;
- load into an audio host;
- provide a command-line tool.

To display or interact with its output, pass the arrays and strings it produces to a toolkit of your
choice.