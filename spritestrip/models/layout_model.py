"""Модели раскладки полосы (pass 3).

- `SizeSpec`: частично заданный целевой размер (scale, width или height).
- `ScaledSize`: результат `scale_resize` — все три величины.
- `LayoutPlan`: ширины, смещения и размер холста; вычисляется один раз за запуск.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple


def _is_missing(value: Optional[float]) -> bool:
    # 0 тоже считается «не задано»: иначе масштаб вырождается
    return value is None or value == 0 or (isinstance(value, float) and math.isnan(value))


def round_half_away(value: float) -> int:
    """Округление к ближайшему целому, половины — от нуля (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class SizeSpec:
    """Частичный целевой размер: задаётся ровно одно из полей."""
    scale: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def has_scale(self) -> bool:
        return not _is_missing(self.scale)

    @property
    def has_width(self) -> bool:
        return not _is_missing(self.width)

    @property
    def has_height(self) -> bool:
        return not _is_missing(self.height)


@dataclass(frozen=True)
class ScaledSize:
    scale: float
    width: int
    height: int


@dataclass(frozen=True)
class LayoutPlan:
    """План раскладки.

    Fields:
        widths: Ширины изображений после приведения к общей высоте, px.
        offsets: Горизонтальные смещения (дробные, как посчитаны свёрткой).
        canvas_width: Накопленная ширина холста (дробная).
        canvas_height: Общая высота, px.
    """
    widths: Tuple[int, ...]
    offsets: Tuple[float, ...]
    canvas_width: float
    canvas_height: int

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return max(1, round_half_away(self.canvas_width)), self.canvas_height

    @property
    def positions(self) -> Tuple[int, ...]:
        """Целочисленные смещения для отрисовки."""
        return tuple(round_half_away(offset) for offset in self.offsets)

    def __len__(self) -> int:
        return len(self.widths)
