"""
Pytest configuration and shared fixtures for Packshot Studio tests.

This module provides synthetic images, an in-memory store, a controllable
clock and a scripted AI collaborator used across the test modules.
"""

import io

import pytest
from PIL import Image

from PS_Libs.constants import MIME_PNG
from PS_Libs.ImageEditingLib.image_models import Frame
from PS_Libs.ProjStoreLib.persistence import InMemoryStore


def png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def jpeg_bytes(image):
    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="JPEG")
    return buffer.getvalue()


def make_frame(width, height, color=(255, 255, 255, 255), box=None, box_color=(200, 0, 0, 255)):
    """
    Build an RGBA frame filled with ``color``.

    Args:
        box: Optional (left, top, right, bottom) inclusive box painted with box_color
    """
    image = Image.new("RGBA", (width, height), color)
    if box is not None:
        left, top, right, bottom = box
        image.paste(box_color, (left, top, right + 1, bottom + 1))
    return Frame(image=image, mime=MIME_PNG)


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeAi:
    """Scripted AI collaborator that records every call."""

    def __init__(
        self,
        kind="packshot",
        removed=None,
        balanced=None,
        classify_error=None,
        remove_error=None,
        balance_error=None,
    ):
        self.kind = kind
        self.removed = removed
        self.balanced = balanced
        self.classify_error = classify_error
        self.remove_error = remove_error
        self.balance_error = balance_error
        self.calls = []
        self.instructions = []

    async def classify(self, image, mime):
        self.calls.append("classify")
        if self.classify_error:
            raise self.classify_error
        return self.kind

    async def remove_background(self, image, mime, instruction=None):
        self.calls.append("remove_background")
        self.instructions.append(instruction)
        if self.remove_error:
            raise self.remove_error
        if self.removed is not None:
            return self.removed
        # Default: a 30x20 red object on white inside a 60x40 canvas
        return png_bytes(make_frame(60, 40, box=(10, 5, 39, 24)).image)

    async def auto_white_balance(self, image, mime):
        self.calls.append("auto_white_balance")
        if self.balance_error:
            raise self.balance_error
        if self.balanced is not None:
            return self.balanced
        return image


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_ai():
    return FakeAi()


@pytest.fixture
def white_frame():
    return make_frame(40, 30)


@pytest.fixture
def product_frame():
    """100x100 white frame with a 20x40 red object at x=10..29, y=40..79."""
    return make_frame(100, 100, box=(10, 40, 29, 79))


@pytest.fixture
def jpeg_upload():
    """A 100x50 solid-blue JPEG upload."""
    return jpeg_bytes(Image.new("RGB", (100, 50), (20, 40, 200)))


@pytest.fixture
def png_upload():
    """A 100x50 solid-blue PNG upload."""
    return png_bytes(Image.new("RGBA", (100, 50), (20, 40, 200, 255)))


