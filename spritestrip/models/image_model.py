"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Загруженное изображение PIL (всегда RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла до конвертации, например "RGB".
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height
