# pcmkit

Building blocks for turning decoded audio samples into PCM files.
Samples are fixed-point integers with 28 fractional bits, so `1 << 28` is
full scale. The package has no dependencies outside the standard library.

## What it covers

- **Fixed-point arithmetic** (`pcmkit.fixed`): `f_mul`, `f_div`, `f_intpart`,
  `f_fracpart`, `f_fromint` and `f_tofixed`, plus the constants `FRACBITS`
  and `F_ONE`. `f_div` gives a rounded quotient, returns 0 when the result
  does not fit 32 bits, and raises `ZeroDivisionError` for a zero divisor.
- **Quantization** (`pcmkit.quantize`): `linear_round` and `linear_dither`
  reduce a sample to a given number of bits; `linear_to_mulaw`,
  `mulaw_to_linear`, `mulaw_round` and `mulaw_dither` handle 8-bit ISDN
  mu-law. Clipping counts and peak levels are recorded in an `AudioStats`.
  A `Dither` holds the noise-shaping error feedback and random-number state
  for one channel. `AudioMode` selects `ROUND` or `DITHER`.
- **PCM encoding** (`pcmkit.pcm`): `PcmEncoder.encode(fmt, left, right, mode,
  stats)` returns interleaved bytes for a mono block (`right=None`) or a
  stereo block. `PcmFormat` names the layouts: `U8`, `S8`, `S16LE`, `S16BE`,
  `S24LE`, `S24BE`, `S32LE`, `S32BE` (24 significant bits, low byte zero) and
  `MULAW`. The encoder keeps separate dither state for each channel.
- **Resampling** (`pcmkit.resample`): `Resampler(oldrate, newrate)` changes
  the sample rate by linear interpolation and carries its state from one
  `block()` call to the next. It raises `ValueError` for a zero target rate
  or a ratio above 6.
- **Filters** (`pcmkit.filter`): a `FilterChain` of functions run on each
  `Frame` of subband samples. `prepend` adds a filter at the front; `run`
  stops at the first filter that returns something other than
  `FilterFlow.CONTINUE`. `gain_filter` scales every subband sample by a
  fixed-point gain, given as a number or as a callable returning one.
- **Output modules** (`pcmkit.outputs`):
  - `WaveOutput` writes a RIFF/WAVE file. `open` writes the header,
    `configure` writes the format and data chunk headers (the first format
    set is kept; precision 0 means 16 bits, anything above 32 means 32),
    `play` appends a block, and `finish` pads the data chunk to an even
    length, fills in the chunk lengths and closes the file.
  - `CddaOutput` writes raw 16-bit big-endian 44.1 kHz stereo, writing a
    mono block to both channels, and pads with silence to a CD frame
    boundary (588 samples) when it finishes.
  - Both accept a path, an open binary stream, or `"-"`/`None` for standard
    output, and raise `AudioOutputError` when writing fails. `configure`
    returns the `AudioConfig` actually used.
  - `select_output(path)` picks the module from a `wave:`, `wav:` or `cdda:`
    prefix or from the extension (`.wav`, `.cdr`, `.cda`, `.cdda`) and
    returns the class and the path to open. It raises `ValueError` for an
    unknown type.
- **Tags** (`pcmkit.tag`, `pcmkit.rgain`, `pcmkit.crc`, `pcmkit.bits`):
  `parse_tag(frame, anc_bit_offset, anc_bitlen)` reads Xing/Info VBR headers
  and LAME tags from the ancillary data of a first frame and returns a `Tag`
  with `XingTag` and `LameTag` contents and the encoder string. It raises
  `TagError` when no tag is found. LAME tags are checked with the reflected
  CRC-16 `crc_compute`; Replay Gain fields are read as `ReplayGain` records.
  `BitReader` reads big-endian bit fields from bytes.
- **Time specifications** (`pcmkit.timespec`): `parse_time` reads strings
  such as `1:30`, `0:05.25`, `3/4` or `1:00-0:10` and returns seconds as a
  `fractions.Fraction`. `get_time(text, positive, name)` also checks that the
  value is positive where required. Both raise `TimeSpecError` for bad
  input.

## What it does not do

pcmkit does not decode MPEG audio: the samples it quantizes, filters and
writes must come from a decoder elsewhere. It does not play sound through a
sound device, and it installs no command-line program.

## Example: writing a WAV file

```python
from pcmkit.outputs import WaveOutput
from pcmkit.quantize import AudioMode, AudioStats

ONE = 1 << 28
left = [0, ONE // 2, -ONE // 2, 0]
right = [0, ONE // 4, -ONE // 4, 0]

stats = AudioStats()
out = WaveOutput()
out.open("tone.wav")
out.configure(2, 44100, 16)
out.play(left, right, AudioMode.ROUND, stats)
out.finish()
```

## Example: resampling a block

```python
from pcmkit.resample import Resampler

resampler = Resampler(48000, 44100)
converted = resampler.block([0, 1 << 20, 1 << 21, 1 << 22])
```

## Example: parsing a time

```python
from pcmkit.timespec import get_time

start = get_time("1:00-0:10", False, "start time")  # Fraction(50, 1)
```

## Running the tests

Install the `test` extra; the test suite runs under pytest.