"""Writing a matrix of occupancy values as a binary PGM image."""

from __future__ import annotations

from typing import Any, BinaryIO, Sequence


def write_pgm(stream: BinaryIO, xsize: int, ysize: int, matrix: Sequence[Sequence[float]]) -> BinaryIO:
    """Write ``matrix[x][y]`` as a P5 image, top row first, pixel ``255 * |1 - value|``.

    Raises ValueError if a pixel falls outside 0..255; nothing is written then.
    """
    pixels = bytearray()
    for y in range(ysize - 1, -1, -1):
        for x in range(xsize):
            value: Any = matrix[x][y]
            level = int(255 * abs(1.0 - float(value)))
            if not 0 <= level <= 255:
                raise ValueError(f"value {value} at ({x}, {y}) does not fit a pixel")
            pixels.append(level)
    stream.write(f"P5\n{xsize}\n{ysize}\n255\n".encode("ascii"))
    stream.write(bytes(pixels))
    return stream