"""Audio output modules that write RIFF/WAVE files and raw CD audio."""

from __future__ import annotations

import contextlib
import os
import struct
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import BinaryIO

from .pcm import PcmEncoder, PcmFormat
from .quantize import MAX_NSAMPLES, AudioMode, AudioStats

CD_FRAME_SAMPLES = 44100 // 75

_WAVE_FORMAT_PCM = 0x0001
_UNKNOWN_LENGTH = b"\xff\xff\xff\xff"


class AudioOutputError(OSError):
    """An audio output module could not write its output."""


@dataclass(frozen=True)
class AudioConfig:
    """The format an output module actually accepted."""

    channels: int
    speed: int
    precision: int


class _FileOutput:
    """Shared handling of the destination stream."""

    def __init__(self) -> None:
        self._file: BinaryIO | None = None
        self._owned = False

    def _open(self, path: str | os.PathLike[str] | BinaryIO | None) -> None:
        if path is None or (isinstance(path, str) and path == "-"):
            self._file = sys.stdout.buffer
            self._owned = False
        elif hasattr(path, "write"):
            self._file = path  # type: ignore[assignment]
            self._owned = False
        else:
            try:
                self._file = open(os.fspath(path), "wb")  # noqa: SIM115
            except OSError as exc:
                raise AudioOutputError(f"{os.fspath(path)}: {exc.strerror}") from exc
            self._owned = True

    def _stream(self) -> BinaryIO:
        if self._file is None:
            raise AudioOutputError("output is not open")
        return self._file

    def _write(self, data: bytes) -> None:
        try:
            self._stream().write(data)
        except OSError as exc:
            raise AudioOutputError(f"fwrite: {exc}") from exc

    def _close(self) -> None:
        stream, owned = self._file, self._owned
        self._file = None
        self._owned = False
        if stream is None:
            return
        try:
            if owned:
                stream.close()
            else:
                stream.flush()
        except OSError as exc:
            raise AudioOutputError(f"fclose: {exc}") from exc


def _check_block(left: Sequence[int]) -> None:
    if len(left) > MAX_NSAMPLES:
        raise ValueError(f"at most {MAX_NSAMPLES} samples per block")


class WaveOutput(_FileOutput):
    """Writes linear PCM into a RIFF/WAVE file, patching lengths at the end."""

    def __init__(self) -> None:
        super().__init__()
        self._encoder = PcmEncoder()
        self._config: AudioConfig | None = None
        self._format: PcmFormat | None = None
        self._riff_len = 0
        self._data_len = 0
        self._data_chunk: int | None = None

    def open(self, path: str | os.PathLike[str] | BinaryIO | None) -> None:
        """Open *path* ("-" or None for standard output) and write the RIFF header."""
        self._open(path)
        self._write(b"RIFF" + _UNKNOWN_LENGTH + b"WAVE")
        self._riff_len = 4
        self._data_len = 0
        self._data_chunk = None
        self._config = None
        self._format = None

    def configure(self, channels: int, speed: int, precision: int) -> AudioConfig:
        """Write the format and data chunk headers; the first format set is kept."""
        if self._config is not None:
            return self._config

        bitdepth = precision
        if bitdepth == 0:
            bitdepth = 16
        elif bitdepth > 32:
            bitdepth = 32

        block_align = channels * ((bitdepth + 7) // 8)
        bytes_per_second = speed * block_align
        chunk = struct.pack(
            "<4sIHHIIHH",
            b"fmt ",
            16,
            _WAVE_FORMAT_PCM,
            channels & 0xFFFF,
            speed & 0xFFFFFFFF,
            bytes_per_second & 0xFFFFFFFF,
            block_align & 0xFFFF,
            bitdepth & 0xFFFF,
        )
        self._write(chunk)
        self._riff_len += len(chunk)

        try:
            self._data_chunk = self._stream().tell()
        except OSError:
            self._data_chunk = None

        self._write(b"data" + _UNKNOWN_LENGTH)
        self._riff_len += 8
        self._data_len = 0

        if bitdepth <= 8:
            self._format = PcmFormat.U8
        elif bitdepth <= 16:
            self._format = PcmFormat.S16LE
        elif bitdepth <= 24:
            self._format = PcmFormat.S24LE
        else:
            self._format = PcmFormat.S32LE

        self._config = AudioConfig(channels, speed, bitdepth)
        return self._config

    def play(
        self,
        left: Sequence[int],
        right: Sequence[int] | None = None,
        mode: AudioMode = AudioMode.DITHER,
        stats: AudioStats | None = None,
    ) -> None:
        """Quantise and append one block of samples."""
        if self._format is None:
            raise AudioOutputError("output is not configured")
        _check_block(left)
        data = self._encoder.encode(
            self._format, left, right, mode, stats if stats is not None else AudioStats()
        )
        self._write(data)
        self._data_len += len(data)
        self._riff_len += len(data)

    def _patch_int32(self, address: int, value: int) -> None:
        stream = self._stream()
        try:
            stream.seek(address)
        except OSError as exc:
            raise AudioOutputError(f"fseek: {exc}") from exc
        self._write(struct.pack("<I", value & 0xFFFFFFFF))
        try:
            stream.seek(0, os.SEEK_END)
        except OSError as exc:
            raise AudioOutputError(f"fseek: {exc}") from exc

    def finish(self) -> None:
        """Pad the data chunk, fill in the chunk lengths and close the output."""
        try:
            if self._config is None:
                self.configure(2, 44100, 0)
            if self._data_len & 1:
                self._write(b"\0")
                self._riff_len += 1
            if self._data_chunk is not None:
                self._patch_int32(self._data_chunk + 4, self._data_len)
            # A stream that cannot seek keeps the unknown RIFF length.
            with contextlib.suppress(AudioOutputError):
                self._patch_int32(4, self._riff_len)
        finally:
            self._close()


class CddaOutput(_FileOutput):
    """Writes raw 16-bit big-endian 44100 Hz stereo, padded to whole CD frames."""

    def __init__(self) -> None:
        super().__init__()
        self._encoder = PcmEncoder()
        self._samplecount = 0

    def open(self, path: str | os.PathLike[str] | BinaryIO | None) -> None:
        """Open *path* ("-" or None for standard output)."""
        self._open(path)
        self._samplecount = 0

    def configure(self, channels: int, speed: int, precision: int) -> AudioConfig:
        """CD audio is always 16-bit 44100 Hz stereo."""
        return AudioConfig(2, 44100, 16)

    def _output(self, data: bytes, nsamples: int) -> None:
        self._write(data)
        self._samplecount = (self._samplecount + nsamples) % CD_FRAME_SAMPLES

    def play(
        self,
        left: Sequence[int],
        right: Sequence[int] | None = None,
        mode: AudioMode = AudioMode.DITHER,
        stats: AudioStats | None = None,
    ) -> None:
        """Quantise and append one block; a mono block is written to both channels."""
        _check_block(left)
        if right is None:
            right = left
        data = self._encoder.encode(
            PcmFormat.S16BE, left, right, mode, stats if stats is not None else AudioStats()
        )
        self._output(data, len(left))

    def finish(self) -> None:
        """Pad with silence to a CD frame boundary and close the output."""
        try:
            if self._samplecount:
                padding = CD_FRAME_SAMPLES - self._samplecount
                self._output(bytes(padding * 2 * 2), padding)
        finally:
            self._close()


_PREFIXES: dict[str, type[_FileOutput]] = {
    "cdda": CddaOutput,
    "wave": WaveOutput,
    "wav": WaveOutput,
}

_EXTENSIONS: dict[str, type[_FileOutput]] = {
    "cdr": CddaOutput,
    "cda": CddaOutput,
    "cdda": CddaOutput,
    "wav": WaveOutput,
}


def select_output(path: str) -> tuple[type[WaveOutput] | type[CddaOutput], str]:
    """Choose an output module from a "type:path" prefix or the file extension.

    Returns the output class and the path to open.
    """
    kind, colon, rest = path.partition(":")
    if colon:
        module = _PREFIXES.get(kind.lower())
        if module is not None:
            return module, rest  # type: ignore[return-value]
    else:
        _, dot, ext = path.rpartition(".")
        if dot:
            module = _EXTENSIONS.get(ext.lower())
            if module is not None:
                return module, path  # type: ignore[return-value]
    raise ValueError(f'unknown output format type for "{path}"')