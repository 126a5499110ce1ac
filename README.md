# fbview

fbview reads uncompressed BMP images. It can flip them top to bottom, resize
them with nearest-neighbour sampling, write them back out as BMP files, and
draw them onto a Linux framebuffer device such as `/dev/fb0`.

It needs only the Python standard library (3.10 or later). Framebuffer access
uses `fcntl` and `mmap`, so it works on Linux only.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

### `fbview`

An interactive tool for a BMP image. It has two subcommands. Both print a
menu and read a transform number from standard input:

```
0.none
1.only bmp reverse      (flip top to bottom)
2.only scale
3.reverse and scale
```

Any number outside 0–3 means no transform. Input that is not an integer
stops the command with an error. For a scale, the tool prints the current
width and height and then asks for the new ones.

* `fbview convert [SOURCE] [DEST]` reads `SOURCE` (default `fileio.bmp`),
  applies the transform, and writes `DEST` (default `dest.bmp`). The
  54-byte header is copied from the source, with the width, height, image
  size and file size fields updated. Each row is padded with zeros to a
  multiple of four bytes.
* `fbview show [SOURCE] [--device PATH] [--hold SECONDS]` opens the
  framebuffer (default `/dev/fb0`) and prints its resolution and pixel
  format. It then loads `SOURCE` (default `fileio.bmp`) and applies the
  transform. Next it asks for an X and Y offset and a background colour:
  1 white, 3 custom red/green/blue values (each taken modulo 256), and any
  other choice black. It clears the screen to that colour and draws the
  image at the offset. Anything past the right or bottom edge is clipped.
  With `--hold` it waits that many seconds before it exits.

On an I/O error, a bad value or end of input, the command prints a message
to standard error and exits with status 1.

Drawing to a framebuffer needs read/write access to the device. This usually
means running from a virtual console as a member of the `video` group.

### `fbview-numbers [PATH]`

Writes between 10 and 14 random numbers from 0 to 99 to `PATH` (default
`random.txt`), separated by commas. It then reads the file back and prints
the numbers on one line, each followed by a space. Characters that do not
start a number are skipped.

### `fbview-search [DIRNAME] [PATTERN]`

Lists the directories and regular files in `DIRNAME` whose names contain
`PATTERN`, sorted by name. Each is labelled as a directory (`目    录`) or a
regular file (`普通文件`). Symbolic links and other entry types are left out.
If either argument is missing, the command prompts for it.

## Library use

```python
from fbview.bitmap import Bitmap
from fbview.framebuffer import Framebuffer, pack_color

image = Bitmap.load("fileio.bmp")
image.flip_vertical()
image.scale(400, 240)
image.save("small.bmp")

with Framebuffer.open("/dev/fb0") as screen:
    screen.clear(pack_color(255, 255, 255))
    screen.draw(image, 10, 20)
```

`fbview.bitmap`

* `Bitmap(width, height, bytes_per_pixel, data, header=b"")` holds the
  unpadded pixel rows. If no header is given, a standard 54-byte header is
  built. Sizes that do not agree raise `ValueError`.
* `Bitmap.from_bytes` and `Bitmap.to_bytes` work on BMP data in memory.
  `load` and `save` work on files. Short, truncated or unsupported data
  raises `ValueError`.
* `flip_vertical()` and `scale(width, height)` change the image in place.
* `pixel(x, y)` returns the stored bytes of one pixel, which is blue, green,
  red for 24-bit images. It raises `IndexError` outside the image.
* `row_stride(width, bytes_per_pixel)` gives the padded row length.
  `nearest_coord(index, ratio, limit)` picks the source coordinate when
  scaling, using single-precision arithmetic.

`fbview.framebuffer`

* `Framebuffer.open(path)` maps a device. It returns the same instance while
  a device is already open. `clear(color)`, `draw(bitmap, x, y)` and
  `close()` act on it, and it works as a context manager. Negative offsets
  raise `ValueError`.
* `ScreenInfo` and `query_screen_info(fd)` describe the visible and virtual
  resolution and the pixel depth.
* `pack_color(red, green, blue)` builds a pixel word.
* `raw_pixels(stream, count)` and `copy_raw_pixels(stream, target, count)`
  turn the three-byte pixels after a BMP header into 32-bit words.

`fbview.cli` provides `Transform`, `apply_transform`, `prompt_transform`,
`prompt_color`, `convert` and `show`. The prompts take any `read`/`write`
callables.

## Limits

* Only uncompressed BMP files with a 54-byte header are read. Pixel data is
  taken to start right after the header. Colour palettes and compression are
  not handled.
* Each framebuffer pixel is treated as one 32-bit word. Pixel sizes above
  four bytes are refused.
* There is no windowed viewer. Images are shown only by writing to a
  framebuffer device.