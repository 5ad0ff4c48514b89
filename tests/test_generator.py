import io
import random
import struct

import pytest
from PIL import Image

from tileavatar import generator as generator_module
from tileavatar.bitmap import row_stride
from tileavatar.errors import CloseFailure, InvalidArgument, OpenFailure
from tileavatar.generator import GenerationSettings, TileImageBuilder, generate, write_image
from tileavatar.rendering import buffer_to_image


def test_default_settings():
    settings = GenerationSettings()
    assert (settings.path, settings.width, settings.height) == ("default.bmp", 100, 100)
    assert (settings.tile_size, settings.max_variation) == (10, 30)


def test_tiles_are_uniform_and_jittered_within_bounds(rng):
    settings = GenerationSettings(width=40, height=30, tile_size=10, max_variation=30)
    buffer = generate(settings, rng)
    base = random.Random(1234)
    red, green, blue = base.randrange(256), base.randrange(256), base.randrange(256)
    for tx in range(0, 40, 10):
        for ty in range(0, 30, 10):
            color = buffer.get_pixel(tx, ty)
            for dx in range(10):
                for dy in range(10):
                    assert buffer.get_pixel(tx + dx, ty + dy) == color
            assert any(
                all(channel == min(start + variation, 255) for channel, start in zip(color, (red, green, blue)))
                for variation in range(30)
            )


def test_same_seed_same_image():
    settings = GenerationSettings(width=33, height=21, tile_size=4, max_variation=50)
    first = generate(settings, random.Random(99))
    second = generate(settings, random.Random(99))
    assert first.data == second.data


def test_zero_variation_paints_base_color(rng):
    buffer = generate(GenerationSettings(width=8, height=8, tile_size=3, max_variation=0), rng)
    colors = {buffer.get_pixel(x, y) for x in range(8) for y in range(8)}
    assert len(colors) == 1


def test_edge_tiles_are_clipped(rng):
    buffer = generate(GenerationSettings(width=105, height=97, tile_size=10), rng)
    assert (buffer.width, buffer.height) == (105, 97)
    assert buffer.get_pixel(104, 96) == buffer.get_pixel(100, 90)
    assert buffer.get_pixel(104, 96) == buffer.get_pixel(104, 90)


@pytest.mark.parametrize(
    "changes",
    [
        {"tile_size": 0},
        {"tile_size": -3},
        {"max_variation": 256},
        {"max_variation": -1},
        {"width": 0},
        {"height": -1},
        {"path": ""},
    ],
)
def test_invalid_settings(changes, tmp_path):
    settings = GenerationSettings(path=str(tmp_path / "x.bmp"))
    for key, value in changes.items():
        setattr(settings, key, value)
    with pytest.raises(InvalidArgument):
        TileImageBuilder(settings, random.Random(0)).build()
    assert not (tmp_path / "x.bmp").exists()


def test_write_image_end_to_end(settings):
    write_image(settings, random.Random(42))
    with open(settings.path, "rb") as handle:
        data = handle.read()
    assert len(data) == 54 + 100 * row_stride(100)
    assert data[:2] == b"BM"
    assert struct.unpack_from("<i", data, 0x12)[0] == 100
    assert struct.unpack_from("<i", data, 0x16)[0] == 100


def test_written_file_decodes_flipped(settings):
    settings.width, settings.height, settings.tile_size = 37, 23, 6
    expected = buffer_to_image(generate(settings, random.Random(5)), bottom_up=True)
    write_image(settings, random.Random(5))
    with Image.open(settings.path) as img:
        assert img.format == "BMP"
        assert img.size == (37, 23)
        assert img.convert("RGB").tobytes() == expected.tobytes()


def test_write_to_stream_runs_hook(rng):
    seen = []
    out = io.BytesIO()
    TileImageBuilder(GenerationSettings(width=4, height=4, tile_size=2), rng).write_to(out, seen.append)
    assert len(seen) == 1
    assert seen[0].consumed
    assert len(out.getvalue()) == 54 + 4 * 12


def test_write_image_open_failure(tmp_path):
    settings = GenerationSettings(path=str(tmp_path / "missing" / "out.bmp"))
    with pytest.raises(OpenFailure):
        write_image(settings, random.Random(0))


class CloseFailingHandle:
    def __init__(self):
        self.chunks = []

    def write(self, chunk):
        self.chunks.append(bytes(chunk))
        return len(chunk)

    def close(self):
        raise OSError(5, "Input/output error")


def test_write_image_close_failure(monkeypatch, settings):
    handles = []

    def fake_open(path, mode):
        handles.append(CloseFailingHandle())
        return handles[-1]

    monkeypatch.setattr(generator_module, "open", fake_open, raising=False)
    with pytest.raises(CloseFailure):
        write_image(settings, random.Random(0))
    assert len(handles) == 1
    assert b"".join(handles[0].chunks)[:2] == b"BM"
