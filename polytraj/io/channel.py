"""
Serialization Channels

Primitive read/write of counts, doubles and length-prefixed double vectors
over a file object. ``BinaryChannel`` stores little-endian IEEE doubles;
``TextChannel`` stores whitespace separated tokens using ``repr`` so that
every double survives a round trip bit for bit.

Any failure of the underlying stream, a truncated stream or a malformed
token raises ``SerializationError``.
"""

from __future__ import annotations

import io
import struct
from pathlib import Path
from typing import IO, Iterator, List, Optional, Sequence, Union

from ..core.errors import SerializationError
from ..core.piecewise import PiecewisePolynomial
from ..core.piecewise_nd import PiecewisePolynomialND

_COUNT_STRUCT = struct.Struct("<Q")
_DOUBLE_STRUCT = struct.Struct("<d")

Trajectory = Union[PiecewisePolynomial, PiecewisePolynomialND]


class Channel:
    """Interface shared by the binary and text channels."""

    def write_count(self, n: int) -> None:
        raise NotImplementedError

    def write_double(self, x: float) -> None:
        raise NotImplementedError

    def read_count(self) -> int:
        raise NotImplementedError

    def read_double(self) -> float:
        raise NotImplementedError

    def write_doubles(self, values: Sequence[float]) -> None:
        self.write_count(len(values))
        for x in values:
            self.write_double(x)

    def read_doubles(self) -> List[float]:
        n = self.read_count()
        return [self.read_double() for _ in range(n)]


class BinaryChannel(Channel):
    """Channel over a binary stream (``open(path, "rb"/"wb")``, ``BytesIO``)."""

    def __init__(self, stream: IO[bytes]) -> None:
        self.stream = stream

    def _write(self, data: bytes) -> None:
        try:
            self.stream.write(data)
        except (OSError, ValueError, TypeError) as exc:
            raise SerializationError(f"Write failed: {exc}") from exc

    def _read(self, size: int) -> bytes:
        try:
            data = self.stream.read(size)
        except (OSError, ValueError, OverflowError, MemoryError) as exc:
            raise SerializationError(f"Read failed: {exc}") from exc
        if len(data) != size:
            raise SerializationError(
                f"Unexpected end of stream: wanted {size} bytes, got {len(data)}."
            )
        return data

    def write_count(self, n: int) -> None:
        if n < 0:
            raise SerializationError(f"Negative count {n}.")
        self._write(_COUNT_STRUCT.pack(n))

    def write_double(self, x: float) -> None:
        self._write(_DOUBLE_STRUCT.pack(float(x)))

    def read_count(self) -> int:
        return _COUNT_STRUCT.unpack(self._read(_COUNT_STRUCT.size))[0]

    def read_double(self) -> float:
        return _DOUBLE_STRUCT.unpack(self._read(_DOUBLE_STRUCT.size))[0]

    def write_doubles(self, values: Sequence[float]) -> None:
        self.write_count(len(values))
        self._write(struct.pack(f"<{len(values)}d", *(float(x) for x in values)))

    def _remaining(self) -> Optional[int]:
        """Bytes left in a seekable stream, None if it cannot tell."""
        try:
            if not self.stream.seekable():
                return None
            pos = self.stream.tell()
            end = self.stream.seek(0, io.SEEK_END)
            self.stream.seek(pos)
        except (AttributeError, OSError, ValueError):
            return None
        return end - pos

    def read_doubles(self) -> List[float]:
        n = self.read_count()
        size = n * _DOUBLE_STRUCT.size
        remaining = self._remaining()
        if remaining is not None and size > remaining:
            raise SerializationError(
                f"Vector of {n} doubles exceeds the {remaining} bytes left."
            )
        return list(struct.unpack(f"<{n}d", self._read(size)))


class TextChannel(Channel):
    """Channel over a text stream; one vector per line when writing."""

    def __init__(self, stream: IO[str]) -> None:
        self.stream = stream
        self._tokens: Optional[Iterator[str]] = None

    def _iter_tokens(self) -> Iterator[str]:
        for line in self.stream:
            yield from line.split()

    def _next_token(self) -> str:
        if self._tokens is None:
            self._tokens = self._iter_tokens()
        try:
            return next(self._tokens)
        except StopIteration:
            raise SerializationError("Unexpected end of stream.") from None
        except (OSError, ValueError) as exc:
            raise SerializationError(f"Read failed: {exc}") from exc

    def _write(self, text: str) -> None:
        try:
            self.stream.write(text)
        except (OSError, ValueError, TypeError) as exc:
            raise SerializationError(f"Write failed: {exc}") from exc

    def write_count(self, n: int) -> None:
        if n < 0:
            raise SerializationError(f"Negative count {n}.")
        self._write(f"{n}\n")

    def write_double(self, x: float) -> None:
        self._write(f"{float(x)!r}\n")

    def write_doubles(self, values: Sequence[float]) -> None:
        tokens = [str(len(values))] + [repr(float(x)) for x in values]
        self._write(" ".join(tokens) + "\n")

    def read_count(self) -> int:
        token = self._next_token()
        try:
            n = int(token)
        except ValueError:
            raise SerializationError(f"Expected a count, got {token!r}.") from None
        if n < 0:
            raise SerializationError(f"Negative count {n}.")
        return n

    def read_double(self) -> float:
        token = self._next_token()
        try:
            return float(token)
        except ValueError:
            raise SerializationError(f"Expected a number, got {token!r}.") from None


def save(traj: Trajectory, path: Union[str, Path], binary: bool = True) -> None:
    """Write ``traj`` to ``path``.

    Raises
    ------
    SerializationError
        If the file cannot be opened or written.
    """
    try:
        with open(path, "wb" if binary else "w") as f:
            channel = BinaryChannel(f) if binary else TextChannel(f)
            ok = traj.write(channel)
    except OSError as exc:
        raise SerializationError(f"Cannot write {path}: {exc}") from exc
    if not ok:
        raise SerializationError(f"Cannot write {path}.")


def load(
    path: Union[str, Path], binary: bool = True, nd: bool = False
) -> Trajectory:
    """Read a trajectory written by ``save``.

    Raises
    ------
    SerializationError
        If the file cannot be opened or does not hold a valid trajectory.
    """
    traj: Trajectory = PiecewisePolynomialND() if nd else PiecewisePolynomial()
    try:
        with open(path, "rb" if binary else "r") as f:
            channel = BinaryChannel(f) if binary else TextChannel(f)
            ok = traj.read(channel)
    except OSError as exc:
        raise SerializationError(f"Cannot read {path}: {exc}") from exc
    if not ok:
        raise SerializationError(f"Cannot read {path}.")
    return traj
