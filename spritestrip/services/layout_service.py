"""Геометрия полосы: пропорциональный ресайз и расчёт смещений.

Чистые функции без ввода-вывода; работают только с размерами, поэтому
тестируются без пикселей.
"""
from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Sequence, Tuple

from spritestrip.errors import EmptyInputError, InvalidArgumentsError
from spritestrip.models.layout_model import LayoutPlan, ScaledSize, SizeSpec, round_half_away

logger = logging.getLogger(__name__)

OVERLAP_FRACTION = 0.45
MIN_HEIGHT = 200


def _checked_scale(scale: float) -> float:
    if not math.isfinite(scale):
        raise InvalidArgumentsError(f"scale_resize: масштаб не конечен ({scale})")
    return scale


def scale_resize(source_width: int, source_height: int, spec: SizeSpec) -> ScaledSize:
    """Дополняет частичный размер с сохранением пропорций.

    Args:
        source_width: Исходная ширина, px.
        source_height: Исходная высота, px.
        spec: Задано ровно одно из scale / width / height.

    Returns:
        `ScaledSize` со всеми тремя величинами.

    Raises:
        InvalidArgumentsError: не задано ни одно поле, заданы и width, и height,
            или масштаб получился не конечным (нулевая сторона исходника).
    """
    if spec.has_scale:
        scale = _checked_scale(float(spec.scale))
        return ScaledSize(
            scale=scale,
            width=round_half_away(source_width * scale),
            height=round_half_away(source_height * scale),
        )
    if not spec.has_width and spec.has_height:
        if source_height == 0:
            raise InvalidArgumentsError("scale_resize: исходная высота равна 0")
        scale = _checked_scale(spec.height / source_height)
        return ScaledSize(scale=scale, width=round_half_away(source_width * scale), height=spec.height)
    if not spec.has_height and spec.has_width:
        if source_width == 0:
            raise InvalidArgumentsError("scale_resize: исходная ширина равна 0")
        scale = _checked_scale(spec.width / source_width)
        return ScaledSize(scale=scale, width=spec.width, height=round_half_away(source_height * scale))
    raise InvalidArgumentsError("scale_resize: Invalid arguments")


def plan_layout(
    sizes: Sequence[Tuple[int, int]],
    overlap_fraction: float = OVERLAP_FRACTION,
    min_height: int = MIN_HEIGHT,
) -> LayoutPlan:
    """Раскладка полосы слева направо с перекрытием.

    Высота — минимальная среди изображений, но не меньше `min_height`.
    Каждое следующее изображение наезжает на предыдущее на
    `overlap_fraction` от ширины предыдущего.
    """
    if not sizes:
        raise EmptyInputError("Нет изображений для сборки")

    target_height = max(min(h for _, h in sizes), min_height)
    widths = tuple(scale_resize(w, h, SizeSpec(height=target_height)).width for w, h in sizes)

    def step(acc: Tuple[Tuple[float, ...], float], pair: Tuple[int, int]) -> Tuple[Tuple[float, ...], float]:
        offsets, canvas_width = acc
        prev_width, width = pair
        overlap = prev_width * overlap_fraction
        return offsets + (canvas_width - overlap,), canvas_width + width - overlap

    offsets, canvas_width = reduce(step, zip(widths, widths[1:]), ((0.0,), float(widths[0])))

    plan = LayoutPlan(
        widths=widths,
        offsets=offsets,
        canvas_width=canvas_width,
        canvas_height=target_height,
    )
    logger.debug(
        "Раскладка: высота=%d, ширины=%s, смещения=%s, холст=%s",
        target_height, list(widths), [round(o, 2) for o in offsets], plan.canvas_size,
    )
    return plan
