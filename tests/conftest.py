import pytest

from .fakes import image_bytes


@pytest.fixture
def png_bytes():
    return image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return image_bytes("JPEG", size=(64, 48))
