from __future__ import annotations

import random

import pytest

from tileavatar.generator import GenerationSettings


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def settings(tmp_path) -> GenerationSettings:
    return GenerationSettings(path=str(tmp_path / "avatar.bmp"), seed=1234)


class ShortWriteStream:
    """Binary sink that transfers fewer bytes than asked once ``fail_at`` writes happened."""

    def __init__(self, fail_at: int) -> None:
        self.fail_at = fail_at
        self.chunks = []

    def write(self, chunk: bytes) -> int:
        if len(self.chunks) >= self.fail_at:
            self.chunks.append(bytes(chunk[: len(chunk) // 2]))
            return len(chunk) // 2
        self.chunks.append(bytes(chunk))
        return len(chunk)


@pytest.fixture
def short_write_stream():
    return ShortWriteStream
