"""Загрузка, сохранение и наложение изображений.

Принципы:
- SRP: класс отвечает только за ввод-вывод пикселей и базовое наложение.
- DIP: проходы и компоновщик работают через этот узкий интерфейс
  (decode / encode / composite), а не с файлами напрямую.
"""
from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from spritestrip.errors import DecodeError, InvalidPathError
from spritestrip.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами и режимом.

        Raises:
            InvalidPathError: если путь не существует или не указывает на файл.
            DecodeError: если файл не распознан как изображение или повреждён.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise InvalidPathError(f"Файл не найден: {path}")

        logger.info("Reading %s", path)
        try:
            with Image.open(path) as src:
                source_mode = src.mode
                pil_image = src.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise DecodeError(path, "не является изображением") from exc
        except (OSError, Image.DecompressionBombError) as exc:
            raise DecodeError(path, str(exc)) from exc

        width, height = pil_image.size
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=source_mode,
        )

    def save_png(self, image: Image.Image, file_path: str | Path) -> Path:
        """Сохраняет изображение как PNG с альфа-каналом."""
        path = Path(file_path)
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        image.save(path, format="PNG")
        logger.info("Written %s", path)
        return path

    def new_canvas(self, width: int, height: int) -> Image.Image:
        """Полностью прозрачный холст RGBA."""
        return Image.new("RGBA", (width, height), (0, 0, 0, 0))

    def composite(self, canvas: Image.Image, image: Image.Image, x: int, y: int) -> Image.Image:
        """Альфа-наложение `image` на `canvas` в точке (x, y), на месте.

        Части, выходящие за холст, обрезаются.
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        # alpha_composite не принимает отрицательный dest — сдвигаем источник
        src_x, src_y = max(0, -x), max(0, -y)
        dest_x, dest_y = max(0, x), max(0, y)
        width = min(image.width - src_x, canvas.width - dest_x)
        height = min(image.height - src_y, canvas.height - dest_y)
        if width <= 0 or height <= 0:
            return canvas
        canvas.alpha_composite(
            image,
            dest=(dest_x, dest_y),
            source=(src_x, src_y, src_x + width, src_y + height),
        )
        return canvas
