"""Pytest configuration for kondipress tests."""

import logging
from typing import Any, Callable

import imagehash
import numpy as np
import pytest
from PIL import Image

from kondipress.source import ImageSource

logging.basicConfig(level=logging.DEBUG)


def _stripes(width: int, height: int, axis: int, period: int = 16) -> Image.Image:
    """Black and white stripes across ``axis`` (1: vertical, 0: horizontal)."""
    index = np.indices((height, width))[axis]
    values = ((index // (period // 2)) % 2 * 255).astype(np.uint8)
    return Image.fromarray(np.stack([values] * 3, axis=2))


def _halves(width: int, height: int) -> Image.Image:
    """Black left half, white right half."""
    values = np.zeros((height, width, 3), dtype=np.uint8)
    values[:, width // 2 :] = 255
    return Image.fromarray(values)


def _hash_error(image1: Image.Image, image2: Image.Image) -> float:
    hash1 = imagehash.average_hash(image1)
    hash2 = imagehash.average_hash(image2)
    error_count = np.sum(np.bitwise_xor(hash1.hash, hash2.hash))
    return error_count / float(hash1.hash.size)


@pytest.fixture
def make_source() -> Callable[..., ImageSource]:
    def _make(
        width: int, height: int, color: Any = (255, 0, 0), mode: str = "RGB", **kwargs
    ) -> ImageSource:
        return ImageSource(Image.new(mode, (width, height), color), **kwargs)

    return _make


@pytest.fixture
def image_file(tmp_path: Any) -> Callable[..., str]:
    def _write(
        filename: str, width: int, height: int, color: Any = "red", **kwargs
    ) -> str:
        path = tmp_path / filename
        Image.new("RGB", (width, height), color).save(path, **kwargs)
        return str(path)

    return _write


@pytest.fixture
def stripes() -> Callable[..., Image.Image]:
    return _stripes


@pytest.fixture
def halves() -> Callable[..., Image.Image]:
    return _halves


@pytest.fixture
def hash_error() -> Callable[[Image.Image, Image.Image], float]:
    return _hash_error
