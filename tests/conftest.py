from __future__ import annotations

from pathlib import Path
from typing import Tuple

import pytest
from PIL import Image

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def solid(size: Tuple[int, int], color=RED) -> Image.Image:
    return Image.new("RGBA", size, color)


@pytest.fixture
def write_image(tmp_path):
    """Пишет сплошное изображение в файл и возвращает путь."""

    def _write(name: str, size: Tuple[int, int] = (100, 200), color=RED, folder: Path | None = None) -> Path:
        target = (folder or tmp_path / "in") / name
        target.parent.mkdir(parents=True, exist_ok=True)
        image = solid(size, color)
        if name.lower().endswith((".jpg", ".jpeg")):
            image.convert("RGB").save(target, format="JPEG")
        else:
            image.save(target, format="PNG")
        return target

    return _write


@pytest.fixture
def input_dir(tmp_path) -> Path:
    folder = tmp_path / "in"
    folder.mkdir(exist_ok=True)
    return folder
