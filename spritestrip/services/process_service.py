from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageOps

from spritestrip.config import Settings
from spritestrip.errors import EmptyInputError
from spritestrip.models.image_model import ImageData
from spritestrip.models.layout_model import LayoutPlan
from spritestrip.services.image_service import ImageService
from spritestrip.services.layout_service import plan_layout

logger = logging.getLogger(__name__)

# floodfill в Pillow сравнивает сумму модулей разностей по каналам RGBA
_CHANNELS = 4


def rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    r, g, b = rgba[:3]
    return f"#{r:02x}{g:02x}{b:02x}"


class ProcessService:
    def __init__(self, settings: Optional[Settings] = None, image_service: Optional[ImageService] = None) -> None:
        self.settings = settings or Settings()
        self.image_service = image_service or ImageService()

    # ---------- Вспомогательные функции ----------
    def _ensure_rgba(self, image: Image.Image) -> Image.Image:
        if image.mode == "RGBA":
            return image.copy()
        return image.convert("RGBA")

    def _alpha_np(self, image: Image.Image) -> np.ndarray:
        """
        Возвращает альфа-канал как numpy-массив uint8 формы (H, W).
        """
        return np.asarray(self._ensure_rgba(image).getchannel("A"), dtype=np.uint8)

    def _fuzz_threshold(self) -> int:
        """
        Допуск `fuzz` (доля 0..1) в пороге Pillow: сумма разностей по 4 каналам.
        """
        return int(round(self.settings.fuzz * 255 * _CHANNELS))

    # ---------- 1) Удаление фона заливкой из угла ----------
    def remove_background(self, image: Image.Image) -> Image.Image:
        """
        Делает прозрачным фон, связный с левым верхним углом.
        - Цвет фона = цвет пикселя (0, 0); если он уже прозрачный — ничего не делаем.
        - Изображение обводится рамкой `border_px` цвета фона, чтобы заливка
          обошла по периметру все участки фона, касающиеся краёв.
        - Заливка из (0, 0) с допуском `fuzz`, затем рамка срезается.
        """
        rgba = self._ensure_rgba(image)
        corner = rgba.getpixel((0, 0))
        if corner[3] == 0:
            logger.info("Flood fill skipped due to transparent top left pixel")
            return rgba

        logger.info("Top left pixel HEX color: %s", rgba_to_hex(corner))
        border = self.settings.border_px
        padded = ImageOps.expand(rgba, border=border, fill=corner) if border else rgba
        thresh = self._fuzz_threshold()
        logger.debug("Заливка: рамка=%d, порог=%d", border, thresh)

        arr = np.array(padded, dtype=np.uint8)
        mask = self._flood_mask(arr, corner, thresh)
        arr[mask, 3] = 0
        result = Image.fromarray(arr)

        if not border:
            return result
        return result.crop((border, border, border + rgba.width, border + rgba.height))

    def _flood_mask(self, arr: np.ndarray, color: Tuple[int, int, int, int], thresh: int) -> np.ndarray:
        """
        Булева маска пикселей, связных с (0, 0) и отличающихся от `color`
        не более чем на `thresh` (сумма модулей разностей по каналам).
        Значение заливки на карте расстояний должно лежать вне допуска.
        """
        distance = np.abs(arr.astype(np.int32) - np.array(color, dtype=np.int32)).sum(axis=2)
        dist_img = Image.fromarray(distance.astype(np.int32))
        sentinel = -(thresh + 1)
        ImageDraw.floodfill(dist_img, (0, 0), sentinel, thresh=thresh)
        return np.asarray(dist_img) == sentinel

    # ---------- 2) Обрезка прозрачных полей ----------
    def trim_transparent_border(self, image: Image.Image) -> Image.Image:
        """
        Обрезает изображение по рамке непрозрачного содержимого (alpha > 0).
        Полностью прозрачное изображение возвращается без изменений.
        """
        rgba = self._ensure_rgba(image)
        alpha = self._alpha_np(rgba)
        rows = np.flatnonzero(alpha.any(axis=1))
        cols = np.flatnonzero(alpha.any(axis=0))
        if rows.size == 0:
            logger.warning("Изображение полностью прозрачное, обрезка пропущена")
            return rgba
        box = (int(cols[0]), int(rows[0]), int(cols[-1]) + 1, int(rows[-1]) + 1)
        logger.debug("Обрезка: %s -> %s", rgba.size, box)
        return rgba.crop(box)

    # ---------- 3) Сборка полосы с перекрытием ----------
    def plan(self, images: Sequence[ImageData]) -> LayoutPlan:
        return plan_layout(
            [img.size for img in images],
            overlap_fraction=self.settings.overlap_fraction,
            min_height=self.settings.min_height,
        )

    def assemble(self, images: Sequence[ImageData]) -> Image.Image:
        """
        Склеивает изображения в горизонтальную полосу общей высоты.
        Порядок входа = порядок отрисовки: следующее изображение
        перекрывает предыдущее (обычное альфа-наложение).
        """
        if not images:
            raise EmptyInputError("Нет изображений для сборки")

        layout = self.plan(images)
        canvas = self.image_service.new_canvas(*layout.canvas_size)
        for img, width, x in zip(images, layout.widths, layout.positions):
            # очень узкое изображение может округлиться до 0 px
            resized = img.pil_image.resize((max(1, width), layout.canvas_height), self.settings.resample_filter)
            self.image_service.composite(canvas, resized, x, 0)
        return canvas
