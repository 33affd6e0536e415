# zyranet

A small neural-network toolkit built on NumPy, with a few audio and text
utilities for experimenting with speech pipelines.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Data layout

Every layer works on 2-D `float32` arrays shaped `(features, batch)`: each
column is one sample. Image inputs are flattened channel by channel, row by
row, so `C` channels of `H x W` pixels become a column of `C * H * W` values.
A column whose feature count does not match a layer raises
`zyranet.layers.DimensionMismatch` (a `ValueError`).

## Layers and models

- `zyranet.layers.Layer` – the abstract interface: `forward`, `backward`,
  `parameters`, `gradients`, `set_training`, `update_parameter`, plus the
  attributes `name`, `input_size`, `output_size` and `training`.
- `zyranet.layers.ReLULayer` – `max(0, x)`; input and output sizes must be
  equal.
- `zyranet.pooling.MaxPoolingLayer(name, channels, height, width, pool_size=2, stride=2)`
  – takes the maximum of each window; the gradient goes to the first maximum.
  `output_dimensions` gives the pooled `(height, width)`.
- `zyranet.conv.ConvolutionalLayer(name, channels, height, width, num_filters, filter_size, stride=1, padding=0, *, rng=None)`
  – square filters with Xavier-uniform initialisation and zero biases.
  `backward` requires a positive learning rate and applies a plain gradient
  step itself. Its parameters are one `(k*k*C, 1)` column per filter followed
  by the biases.
- `zyranet.model.Model` – runs layers in order. `forward` records every
  activation in `activations`; `backward` returns the gradient with respect
  to the input; `compute_loss` is the mean cross-entropy of the true class
  (the row whose target exceeds 0.5) plus `0.01` times the sum of squared
  parameters; `train(input, target, learning_rate)` does one forward pass,
  backpropagates `(output - target) / batch` and returns the loss.
  `set_training` switches every layer; `input_size` and `output_size` are 0
  for an empty model.
- `zyranet.optim.AdamOptimizer(model, learning_rate=0.001, beta1=0.9, beta2=0.999, epsilon=1e-8)`
  – `step()` applies a bias-corrected Adam update to each parameter from the
  gradients the layers last stored. `learning_rate` can be reassigned and must
  stay positive.

```python
import numpy as np

from zyranet.conv import ConvolutionalLayer
from zyranet.layers import ReLULayer
from zyranet.model import Model
from zyranet.optim import AdamOptimizer
from zyranet.pooling import MaxPoolingLayer

model = Model()
model.add_layer(ConvolutionalLayer("conv", 1, 8, 8, 4, 3, 1, 1))  # 4 x 8 x 8
model.add_layer(ReLULayer("relu", 4 * 8 * 8, 4 * 8 * 8))
model.add_layer(MaxPoolingLayer("pool", 4, 8, 8, 2, 2))           # 4 x 4 x 4

batch = np.random.default_rng(0).random((64, 16), dtype=np.float32)
output = model.forward(batch)                 # shape (64, 16)

model.backward(np.ones_like(output) / output.shape[1], 0.01)
AdamOptimizer(model, 0.001).step()
```

## Audio features

`zyranet.audio` reads PCM WAV files (8, 16, 24 or 32-bit) with `read_wav`,
which returns an `AudioData` with `samples`, `sample_rate`, `channels` and
`frames`. Unreadable files raise `AudioFileError`.

`extract_mfcc(path)` returns a `(frames, 13)` array: pre-emphasis of 0.97,
512-sample Hamming-windowed frames with a hop of 256, a 512-point magnitude
spectrum, a 26-filter mel bank, a log and an unnormalised DCT-II. Multi-channel
files raise `ValueError`. `hamming_window`, `mel_filter_bank` and `dct` are
available on their own.

## Speech

- `zyranet.stt.STTModel` – `train(training_data, labels)` stores labelled
  `(frames, coefficients)` sequences; `predict(features)` takes a majority
  vote of the three nearest samples by Euclidean distance over the frames they
  share, ties going to the label that sorts first.
- `zyranet.speech.SpeechToText(model=None)` – `convert_speech_to_text(path)`
  runs `extract_mfcc` and the model's `predict`; `save_text_to_file` writes
  text to a file.
- `zyranet.tts.TextToSpeech` – `text_to_phonemes` always returns the letters
  of `"this is a placeholder"`, and `synthesize_waveform` /
  `convert_text_to_speech` write the fixed text
  `"Audio content based on phonemes."` to the output file. No audio is
  produced.

## Data and text helpers

- `zyranet.data.DataHandler` – `load_data` appends a file's lines to `data`,
  `process_data` lower-cases their ASCII letters, `save_data` writes them back
  one per line.
- `zyranet.text.clean_line` lower-cases ASCII letters and removes everything
  but ASCII letters, digits and whitespace; `preprocess_text(input_dir, output_file)`
  cleans every `.txt` file of a directory, in name order, into one file and
  returns how many files it read.
- `zyranet.personality.PersonalityManager` – `add_personality`,
  `set_active_personality` (raises `KeyError` for an unknown name) and
  `respond`, which returns a fixed sentence naming the active personality, or
  `"No active personality set."`.
- `zyranet.mnist` – `read_mnist(images_path, labels_path, num_samples)`
  returns normalised `(784, n)` images and `(10, n)` one-hot labels from IDX
  files; `augment_image(image, rng=None)` randomly shifts, adds noise to and
  rotates one image; `accuracy(predictions, labels)` compares column-wise
  argmaxes; `create_directory` and `format_time` (`"<m>m <s>s"`) round it off.

## Commands

Write feature files for every `.wav` file in `<input_dir>/clips`:

```
zyranet-preprocess-audio <input_dir> <output_dir>
```

Each clip becomes `<output_dir>/<clip name>.features`. The features are
zero-filled: one line of 13 zeros per 16000 samples of the file. Clips that
cannot be read are skipped.

Clean every `.txt` file in a directory into a single file:

```
zyranet-preprocess-text <input_dir> <output_file>
```

## What it does not do

- There are no dense, softmax, batch-normalisation or dropout layers, so no
  complete classifier can be assembled from the package alone, and nothing
  saves or loads trained models.
- `zyranet.cli.build_model` stacks two ReLU layers of different sizes, which
  `ReLULayer` rejects with `ValueError`; `zyranet.cli.main` therefore reports
  that error and returns 1 rather than training on XOR.
- Audio feature files from `zyranet-preprocess-audio` hold zeros, not real
  coefficients, and text-to-speech writes a fixed text file instead of sound.