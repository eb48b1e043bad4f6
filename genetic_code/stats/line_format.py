"""Pattern-driven statistics lines.

A pattern mixes literal text with ``%`` escapes:

=======  ==============================================
``%P``   population, decimal text
``%D``   population change since the previous sample
``%G``   step number
``%F``   food cell count
``%p``   population, 4-byte big-endian signed integer
``%d``   population change, binary
``%g``   step number, binary
``%f``   food cell count, binary
``%%``   literal percent sign
``%n``   line feed
``%r``   carriage return
=======  ==============================================

Each sample is written as one rendering of the whole pattern, so a text log
typically ends its pattern with ``%n``.
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import BinaryIO

from genetic_code.domain.snapshot import FieldSnapshot
from genetic_code.stats.sampler import DataPoint, StatisticsSampler

LineElement = Callable[[DataPoint], bytes]
"""Renders one part of a line for a data point."""

_FIELDS: dict[str, str] = {
    "p": "population",
    "d": "population_delta",
    "g": "step",
    "f": "food",
}
_CONTROL: dict[str, bytes] = {"%": b"%", "n": b"\n", "r": b"\r"}
_INT32 = struct.Struct(">i")


def _text_element(attribute: str) -> LineElement:
    return lambda point: str(getattr(point, attribute)).encode("utf-8")


def _binary_element(attribute: str) -> LineElement:
    return lambda point: _INT32.pack(getattr(point, attribute))


def _literal_element(raw: bytes) -> LineElement:
    return lambda point: raw


def _escape_element(code: str, pattern: str) -> LineElement:
    if code in _CONTROL:
        return _literal_element(_CONTROL[code])
    if code in _FIELDS:
        return _binary_element(_FIELDS[code])
    if code.lower() in _FIELDS:
        return _text_element(_FIELDS[code.lower()])
    raise ValueError(
        f"Unknown escape code {ord(code)} (character {code!r}) in pattern {pattern!r}. "
        "Supported codes: %P %D %G %F %p %d %g %f %% %n %r"
    )


def parse_pattern(pattern: str) -> list[LineElement]:
    """Compile *pattern* into line elements; raises ValueError on bad escapes."""
    elements: list[LineElement] = []
    start = 0
    while (escape := pattern.find("%", start)) != -1:
        if start < escape:
            elements.append(_literal_element(pattern[start:escape].encode("utf-8")))
        if escape + 1 >= len(pattern):
            raise ValueError(
                "Pattern must not end with the escape character (%). Use %% for a percent sign."
            )
        elements.append(_escape_element(pattern[escape + 1], pattern))
        start = escape + 2
    if start < len(pattern):
        elements.append(_literal_element(pattern[start:].encode("utf-8")))
    return elements


def format_data_point(elements: Iterable[LineElement], point: DataPoint) -> bytes:
    return b"".join(element(point) for element in elements)


class StatisticsFile:
    """One output file receiving a formatted record per data point."""

    def __init__(self, path: Path, pattern: str) -> None:
        # Parse before opening so a bad pattern never truncates an existing file.
        self.elements = parse_pattern(pattern)
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._out: BinaryIO | None = self.path.open("wb")

    @property
    def closed(self) -> bool:
        return self._out is None

    def write(self, point: DataPoint) -> None:
        if self._out is None:
            raise ValueError(f"statistics file {self.path} is closed")
        self._out.write(format_data_point(self.elements, point))

    def flush(self) -> None:
        if self._out is not None:
            self._out.flush()

    def close(self) -> None:
        if self._out is not None:
            out, self._out = self._out, None
            out.close()


class StatisticsWriter:
    """Fans data points out to every registered statistics file.

    Sampling is skipped entirely when no file is registered.
    """

    def __init__(self, destinations: Iterable[tuple[Path, str]] = ()) -> None:
        self.sampler = StatisticsSampler()
        self.files: list[StatisticsFile] = []
        try:
            for path, pattern in destinations:
                self.add_file(path, pattern)
        except Exception:
            self.close()
            raise

    def add_file(self, path: Path, pattern: str) -> StatisticsFile:
        stats_file = StatisticsFile(path, pattern)
        self.files.append(stats_file)
        return stats_file

    def update(self, snapshot: FieldSnapshot) -> DataPoint | None:
        if not self.files:
            return None
        point = self.sampler.sample(snapshot)
        for stats_file in self.files:
            stats_file.write(point)
        return point

    def flush(self) -> None:
        for stats_file in self.files:
            stats_file.flush()

    def close(self) -> None:
        for stats_file in self.files:
            stats_file.close()

    def __enter__(self) -> StatisticsWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
