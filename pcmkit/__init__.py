"""Fixed-point PCM quantization, resampling, filters, WAV/CDDA output, time parsing and Xing/LAME tag parsing."""

__version__ = "0.1.0"

__all__ = [
    "bits",
    "crc",
    "filter",
    "fixed",
    "outputs",
    "pcm",
    "quantize",
    "resample",
    "rgain",
    "tag",
    "timespec",
]