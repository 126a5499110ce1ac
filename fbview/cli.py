"""Interactive front end: transform a BMP file and save it or show it on a framebuffer."""

from __future__ import annotations

import argparse
import enum
import sys
import time
from os import PathLike
from typing import Callable, Optional, Sequence, Tuple, Union

from fbview.bitmap import Bitmap
from fbview.framebuffer import Framebuffer, pack_color

Reader = Callable[[], str]
Writer = Callable[[str], object]
PathArg = Union[str, PathLike]

_RULE = "-----------------------------------\n"


class Transform(enum.IntEnum):
    NONE = 0
    FLIP = 1
    SCALE = 2
    FLIP_AND_SCALE = 3


def apply_transform(bitmap: Bitmap, transform: Transform,
                    size: Optional[Tuple[int, int]] = None) -> None:
    """Flip and/or scale bitmap in place as the transform asks."""
    if transform in (Transform.FLIP, Transform.FLIP_AND_SCALE):
        bitmap.flip_vertical()
    if transform in (Transform.SCALE, Transform.FLIP_AND_SCALE):
        if size is None:
            raise ValueError("scaling needs a target size")
        bitmap.scale(*size)


def _read_int(read: Reader) -> int:
    text = read().strip()
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"expected an integer, got {text!r}") from None


def prompt_transform(bitmap: Bitmap, read: Reader, write: Writer) -> Transform:
    """Ask which transform to apply, ask for a size if needed, and apply it."""
    write(_RULE)
    write("-        Enter select for bmp     -\n")
    write("-        0.none                   -\n")
    write("-        1.only bmp reverse       -\n")
    write("-        2.only scale             -\n")
    write("-        3.reverse and scale      -\n")
    write(_RULE)
    choice = _read_int(read)
    try:
        transform = Transform(choice)
    except ValueError:
        transform = Transform.NONE
    size = None
    if transform in (Transform.SCALE, Transform.FLIP_AND_SCALE):
        write(f"The original image width and height: {bitmap.width}, {bitmap.height}.\n")
        write("Enter scaled width: ")
        width = _read_int(read)
        write("Enter scaled height: ")
        height = _read_int(read)
        size = (width, height)
    apply_transform(bitmap, transform, size)
    return transform


def prompt_color(read: Reader, write: Writer) -> int:
    """Ask for the background colour and return it as a pixel word."""
    write(_RULE)
    write("-   Enter select for clear RGB:   -\n")
    write("-        1.White                  -\n")
    write("-        2.Black                  -\n")
    write("-        3.Custom                 -\n")
    write(_RULE)
    choice = _read_int(read)
    if choice == 1:
        return pack_color(255, 255, 255)
    if choice == 3:
        channels = []
        for name in ("Red", "Green", "Blue"):
            write(f"Enter {name}: ")
            channels.append(_read_int(read) & 0xFF)
        return pack_color(*channels)
    return pack_color(0, 0, 0)


def convert(source: PathArg, dest: PathArg, read: Reader, write: Writer) -> Bitmap:
    """Load source, apply the chosen transform and save the result to dest."""
    bitmap = Bitmap.load(source)
    prompt_transform(bitmap, read, write)
    bitmap.save(dest)
    return bitmap


def show(source: PathArg, device: PathArg, read: Reader, write: Writer) -> Bitmap:
    """Load source, transform it and draw it on the framebuffer over a cleared screen."""
    with Framebuffer.open(device) as screen:
        info = screen.info
        write(f"Screen resolution: {info.width}x{info.height}\n")
        write(f"Pixel format: {info.bits_per_pixel}\n")
        bitmap = Bitmap.load(source)
        prompt_transform(bitmap, read, write)
        write("Enter the offset to write to the device:\n")
        write("X offset: ")
        x = _read_int(read)
        write("Y offset: ")
        y = _read_int(read)
        color = prompt_color(read, write)
        screen.clear(color)
        screen.draw(bitmap, x, y)
    return bitmap


def _console_read() -> str:
    line = sys.stdin.readline()
    if not line:
        raise EOFError("end of input")
    return line


def _console_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Flip and scale BMP images.")
    commands = parser.add_subparsers(dest="command", required=True)
    convert_parser = commands.add_parser("convert", help="transform an image into a new file")
    convert_parser.add_argument("source", nargs="?", default="fileio.bmp")
    convert_parser.add_argument("dest", nargs="?", default="dest.bmp")
    show_parser = commands.add_parser("show", help="draw an image on a framebuffer")
    show_parser.add_argument("source", nargs="?", default="fileio.bmp")
    show_parser.add_argument("--device", default="/dev/fb0")
    show_parser.add_argument("--hold", type=float, default=0.0,
                             help="seconds to wait after drawing")
    args = parser.parse_args(argv)

    try:
        if args.command == "convert":
            convert(args.source, args.dest, _console_read, _console_write)
        else:
            show(args.source, args.device, _console_read, _console_write)
            if args.hold > 0:
                time.sleep(args.hold)
    except (OSError, ValueError, EOFError) as exc:
        print(f"{args.command}: {exc}", file=sys.stderr)
        return 1
    return 0