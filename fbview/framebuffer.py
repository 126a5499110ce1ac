"""Linux framebuffer access: screen geometry, clearing and drawing bitmaps."""

from __future__ import annotations

import mmap
import os
import struct
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO, ClassVar, Dict, Iterator, Optional, Union

from fbview.bitmap import HEADER_SIZE, Bitmap

FBIOGET_VSCREENINFO = 0x4600
_VSCREENINFO_SIZE = 160
_CELL = 4  # every pixel occupies one 32-bit word in the mapping


@dataclass(frozen=True)
class ScreenInfo:
    """Visible and virtual resolution of a framebuffer and its pixel depth."""

    width: int
    height: int
    virtual_width: int
    virtual_height: int
    bits_per_pixel: int

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def mapping_size(self) -> int:
        return self.virtual_width * self.virtual_height * self.bytes_per_pixel


def pack_color(red: int, green: int, blue: int) -> int:
    """Pack colour channels into a pixel word stored as blue, green, red bytes."""
    for name, value in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} channel {value} outside 0..255")
    return int.from_bytes(bytes((blue, green, red, 0)), "little")


def query_screen_info(fd: int) -> ScreenInfo:
    """Ask the framebuffer behind an open descriptor for its geometry."""
    import fcntl

    buffer = bytearray(_VSCREENINFO_SIZE)
    fcntl.ioctl(fd, FBIOGET_VSCREENINFO, buffer, True)
    xres, yres, xres_virtual, yres_virtual, _xoffset, _yoffset, bits = struct.unpack_from(
        "=7I", buffer
    )
    return ScreenInfo(xres, yres, xres_virtual, yres_virtual, bits)


def raw_pixels(stream: BinaryIO, count: int) -> Iterator[bytes]:
    """Yield count pixel words read as three-byte triples after a BMP header."""
    stream.seek(HEADER_SIZE)
    for _ in range(count):
        yield stream.read(3).ljust(3, b"\0") + b"\0"


def copy_raw_pixels(stream: BinaryIO, target, count: int) -> int:
    """Copy count raw BMP pixels into a writable buffer as 32-bit words."""
    needed = count * _CELL
    with memoryview(target) as view:
        if len(view) < needed:
            raise ValueError(f"target holds {len(view)} bytes, {needed} needed")
        for index, word in enumerate(raw_pixels(stream, count)):
            offset = index * _CELL
            view[offset:offset + _CELL] = word
    return needed


class Framebuffer:
    """A mapped framebuffer; one instance is shared per device path."""

    _open_devices: ClassVar[Dict[str, "Framebuffer"]] = {}

    def __init__(self, info: ScreenInfo, memory, fd: Optional[int] = None,
                 path: Optional[str] = None) -> None:
        self.info = info
        self._memory = memory
        self._fd = fd
        self._path = path
        self._closed = False

    @classmethod
    def open(cls, path: Union[str, PathLike]) -> "Framebuffer":
        """Open and map a framebuffer device, reusing an instance already open."""
        key = os.path.realpath(path)
        existing = cls._open_devices.get(key)
        if existing is not None and not existing.closed:
            return existing
        fd = os.open(path, os.O_RDWR)
        try:
            info = query_screen_info(fd)
            memory = mmap.mmap(fd, info.mapping_size, mmap.MAP_SHARED,
                               mmap.PROT_READ | mmap.PROT_WRITE)
        except BaseException:
            os.close(fd)
            raise
        device = cls(info, memory, fd, key)
        cls._open_devices[key] = device
        return device

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("framebuffer is closed")

    def clear(self, color: int) -> None:
        """Fill every visible pixel with color."""
        self._check_open()
        size = self.info.bytes_per_pixel
        if not 0 < size <= _CELL:
            raise ValueError(f"unsupported pixel size {size}")
        total = self.info.width * self.info.height
        if total <= 0:
            return
        color_bytes = (color & 0xFFFFFFFF).to_bytes(4, "little")
        span = (total - 1) * _CELL
        with memoryview(self._memory) as view:
            if span + size > len(view):
                raise ValueError("screen does not fit in the mapped memory")
            for k in range(size):
                view[k:k + span + 1:_CELL] = bytes((color_bytes[k],)) * total

    def draw(self, bitmap: Bitmap, x: int = 0, y: int = 0) -> None:
        """Copy bitmap rows to the screen at (x, y), clipped at the right and bottom."""
        self._check_open()
        if x < 0 or y < 0:
            raise ValueError(f"negative offset ({x}, {y})")
        size = bitmap.bytes_per_pixel
        if size > _CELL:
            raise ValueError(f"unsupported pixel size {size}")
        bw, bh = bitmap.width, bitmap.height
        lw, lh = self.info.width, self.info.height
        real_w = bw if x + bw <= lw else lw - x
        real_h = bh if y + bh <= lh else lh - y
        if real_w <= 0 or real_h <= 0:
            return
        stride = self.info.virtual_width
        span = (real_w - 1) * _CELL
        with memoryview(self._memory) as view:
            last = ((y + real_h - 1) * stride + x + real_w - 1) * _CELL + size
            if last > len(view):
                raise ValueError("image does not fit in the mapped memory")
            for row in range(real_h):
                base = ((y + row) * stride + x) * _CELL
                start = row * bw * size
                source = bitmap.data[start:start + real_w * size]
                for k in range(size):
                    view[base + k:base + k + span + 1:_CELL] = source[k::size]

    def close(self) -> None:
        """Unmap the memory and close the device; safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if isinstance(self._memory, mmap.mmap):
            self._memory.close()
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None
        if self._path is not None and self._open_devices.get(self._path) is self:
            del self._open_devices[self._path]

    def __enter__(self) -> "Framebuffer":
        return self

    def __exit__(self, *args) -> None:
        self.close()