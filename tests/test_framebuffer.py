import io

import pytest

from fbview.bitmap import HEADER_SIZE, Bitmap
from fbview.framebuffer import (
    Framebuffer,
    ScreenInfo,
    copy_raw_pixels,
    pack_color,
    query_screen_info,
    raw_pixels,
)


def _cell(memory, x, y, stride):
    offset = (y * stride + x) * 4
    return bytes(memory[offset:offset + 4])


def _screen(width=4, height=3, bits=32, virtual_width=None):
    vw = virtual_width if virtual_width is not None else width
    info = ScreenInfo(width, height, vw, height, bits)
    memory = bytearray(vw * height * 4)
    return Framebuffer(info, memory), memory


def test_pack_color_byte_order():
    assert pack_color(10, 20, 30).to_bytes(4, "little") == bytes((30, 20, 10, 0))


def test_pack_color_rejects_out_of_range():
    with pytest.raises(ValueError):
        pack_color(256, 0, 0)


def test_screen_info_bytes_per_pixel():
    info = ScreenInfo(800, 480, 800, 960, 32)
    assert info.bytes_per_pixel == 4
    assert info.mapping_size == 800 * 960 * 4


def test_query_screen_info_on_regular_file(tmp_path):
    path = tmp_path / "plain"
    path.write_bytes(b"x")
    with open(path, "rb") as stream:
        with pytest.raises(OSError):
            query_screen_info(stream.fileno())


def test_open_regular_file_fails(tmp_path):
    path = tmp_path / "plain"
    path.write_bytes(bytes(64))
    with pytest.raises(OSError):
        Framebuffer.open(path)


def test_raw_pixels_pads_each_triple():
    stream = io.BytesIO(bytes(HEADER_SIZE) + bytes(range(1, 7)))
    assert list(raw_pixels(stream, 2)) == [bytes((1, 2, 3, 0)), bytes((4, 5, 6, 0))]


def test_raw_pixels_short_data_gives_zeros():
    stream = io.BytesIO(bytes(HEADER_SIZE) + bytes((9,)))
    words = list(raw_pixels(stream, 2))
    assert words[0] == bytes((9, 0, 0, 0))
    assert words[1] == bytes(4)


def test_copy_raw_pixels_into_buffer():
    stream = io.BytesIO(bytes(HEADER_SIZE) + bytes(range(1, 7)))
    target = bytearray(8)
    assert copy_raw_pixels(stream, target, 2) == len(target)
    assert target == bytearray((1, 2, 3, 0, 4, 5, 6, 0))


def test_copy_raw_pixels_target_too_small():
    stream = io.BytesIO(bytes(HEADER_SIZE) + bytes(6))
    with pytest.raises(ValueError):
        copy_raw_pixels(stream, bytearray(4), 2)


def test_clear_fills_every_cell():
    screen, memory = _screen()
    color = pack_color(1, 2, 3)
    screen.clear(color)
    assert memory == bytearray(color.to_bytes(4, "little") * 12)


def test_clear_sixteen_bit_writes_two_bytes_per_cell():
    screen, memory = _screen(width=2, height=1, bits=16)
    screen.clear(pack_color(7, 8, 9))
    assert bytes(memory) == bytes((9, 8, 0, 0, 9, 8, 0, 0))


def test_draw_places_rows_and_keeps_high_byte():
    screen, memory = _screen()
    screen.clear(pack_color(100, 100, 100))
    bitmap = Bitmap(2, 2, 3, bytes(range(1, 13)))
    screen.draw(bitmap, 1, 1)
    assert _cell(memory, 1, 1, 4) == bitmap.pixel(0, 0) + bytes((0,))
    assert _cell(memory, 2, 1, 4) == bitmap.pixel(1, 0) + bytes((0,))
    assert _cell(memory, 1, 2, 4) == bitmap.pixel(0, 1) + bytes((0,))
    assert _cell(memory, 2, 2, 4) == bitmap.pixel(1, 1) + bytes((0,))
    untouched = pack_color(100, 100, 100).to_bytes(4, "little")
    assert _cell(memory, 0, 0, 4) == untouched
    assert _cell(memory, 3, 2, 4) == untouched


def test_draw_clips_to_screen():
    screen, memory = _screen()
    bitmap = Bitmap(3, 3, 4, bytes(range(36)))
    screen.draw(bitmap, 2, 2)
    assert _cell(memory, 2, 2, 4) == bitmap.pixel(0, 0)
    assert _cell(memory, 3, 2, 4) == bitmap.pixel(1, 0)
    assert memory[:2 * 4 * 4 + 2 * 4] == bytearray(40)


def test_draw_uses_virtual_stride():
    screen, memory = _screen(width=2, height=2, virtual_width=4)
    bitmap = Bitmap(2, 2, 4, bytes(range(16)))
    screen.draw(bitmap, 0, 1)
    assert _cell(memory, 0, 1, 4) == bitmap.pixel(0, 0)
    assert _cell(memory, 1, 1, 4) == bitmap.pixel(1, 0)
    assert _cell(memory, 2, 1, 4) == bytes(4)


def test_draw_outside_screen_changes_nothing():
    screen, memory = _screen()
    screen.draw(Bitmap(1, 1, 4, bytes((5, 6, 7, 8))), 10, 0)
    assert memory == bytearray(len(memory))


def test_draw_negative_offset_rejected():
    screen, _ = _screen()
    with pytest.raises(ValueError):
        screen.draw(Bitmap(1, 1, 3, bytes(3)), -1, 0)


def test_closed_framebuffer_rejects_drawing():
    screen, _ = _screen()
    with screen as opened:
        assert opened is screen
    assert screen.closed
    with pytest.raises(ValueError):
        screen.clear(0)