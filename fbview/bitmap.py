"""Uncompressed BMP images: loading, flipping, nearest-neighbour scaling, saving."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

HEADER_SIZE = 54

_WIDTH_OFFSET = 18
_HEIGHT_OFFSET = 22
_BITS_OFFSET = 28
_IMAGE_SIZE_OFFSET = 34
_FILE_SIZE_OFFSET = 2


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def row_stride(width: int, bytes_per_pixel: int) -> int:
    """Return the length in bytes of one stored row, padded to four bytes."""
    return (width * bytes_per_pixel + 3) // 4 * 4


def nearest_coord(index: int, ratio: float, limit: int) -> int:
    """Map a target coordinate to the nearest source coordinate, clamped below limit."""
    product = _f32(_f32(float(index)) * _f32(ratio))
    result = int(_f32(product + 0.5))
    return limit - 1 if result >= limit else result


def _default_header(width: int, height: int, bytes_per_pixel: int) -> bytes:
    image_size = row_stride(width, bytes_per_pixel) * height
    return struct.pack(
        "<2sIHHIIiiHHIIiiII",
        b"BM",
        image_size + HEADER_SIZE,
        0,
        0,
        HEADER_SIZE,
        40,
        width,
        height,
        1,
        bytes_per_pixel * 8,
        0,
        image_size,
        2835,
        2835,
        0,
        0,
    )


@dataclass
class Bitmap:
    """Pixel rows of a BMP image without padding, together with its header."""

    width: int
    height: int
    bytes_per_pixel: int
    data: bytearray
    header: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid image size {self.width}x{self.height}")
        if self.bytes_per_pixel <= 0:
            raise ValueError(f"invalid pixel size {self.bytes_per_pixel}")
        self.data = bytearray(self.data)
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.data) != expected:
            raise ValueError(f"pixel data holds {len(self.data)} bytes, expected {expected}")
        if not self.header:
            self.header = _default_header(self.width, self.height, self.bytes_per_pixel)
        elif len(self.header) < HEADER_SIZE:
            raise ValueError("header is shorter than 54 bytes")
        self.header = bytes(self.header[:HEADER_SIZE])

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Bitmap":
        """Parse the contents of a BMP file."""
        if len(raw) < HEADER_SIZE:
            raise ValueError("data is too short to hold a BMP header")
        width, height = struct.unpack_from("<ii", raw, _WIDTH_OFFSET)
        (bits,) = struct.unpack_from("<h", raw, _BITS_OFFSET)
        bytes_per_pixel = int(bits / 8)
        if width <= 0 or height <= 0 or bytes_per_pixel <= 0:
            raise ValueError(f"unsupported image: {width}x{height}, {bits} bits per pixel")

        stride = row_stride(width, bytes_per_pixel)
        row_length = width * bytes_per_pixel
        rows = []
        for start in range(HEADER_SIZE, HEADER_SIZE + stride * height, stride):
            row = raw[start:start + row_length]
            if len(row) < row_length:
                raise ValueError("pixel data is truncated")
            rows.append(row)
        return cls(width, height, bytes_per_pixel, bytearray(b"".join(rows)), raw[:HEADER_SIZE])

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> "Bitmap":
        """Read a BMP file from disk."""
        with open(path, "rb") as stream:
            return cls.from_bytes(stream.read())

    @property
    def _row_length(self) -> int:
        return self.width * self.bytes_per_pixel

    def flip_vertical(self) -> None:
        """Reverse the order of the rows in place."""
        length = self._row_length
        rows = [self.data[start:start + length] for start in range(0, len(self.data), length)]
        self.data = bytearray(b"".join(reversed(rows)))

    def scale(self, width: int, height: int) -> None:
        """Resize in place to width x height by nearest-neighbour sampling."""
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid target size {width}x{height}")
        x_ratio = _f32(self.width / width)
        y_ratio = _f32(self.height / height)
        columns = [nearest_coord(i, x_ratio, self.width) for i in range(width)]
        lines = [nearest_coord(j, y_ratio, self.height) for j in range(height)]
        size = self.bytes_per_pixel
        out = bytearray()
        for y in lines:
            base = y * self.width
            for x in columns:
                offset = (base + x) * size
                out += self.data[offset:offset + size]
        self.data = out
        self.width = width
        self.height = height

    def pixel(self, x: int, y: int) -> bytes:
        """Return the stored bytes of the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        offset = (y * self.width + x) * self.bytes_per_pixel
        return bytes(self.data[offset:offset + self.bytes_per_pixel])

    def to_bytes(self) -> bytes:
        """Serialise to BMP file contents, updating size fields and padding rows."""
        stride = row_stride(self.width, self.bytes_per_pixel)
        header = bytearray(self.header)
        struct.pack_into("<i", header, _WIDTH_OFFSET, self.width)
        struct.pack_into("<i", header, _HEIGHT_OFFSET, self.height)
        struct.pack_into("<I", header, _IMAGE_SIZE_OFFSET, stride * self.height)
        struct.pack_into("<I", header, _FILE_SIZE_OFFSET, stride * self.height + HEADER_SIZE)

        length = self._row_length
        padding = bytes(stride - length)
        body = b"".join(
            bytes(self.data[start:start + length]) + padding
            for start in range(0, len(self.data), length)
        )
        return bytes(header) + body

    def save(self, path: Union[str, PathLike]) -> None:
        """Write the image to a BMP file."""
        with open(path, "wb") as stream:
            stream.write(self.to_bytes())