"""Настройки обработки и их загрузка из YAML."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from PIL import Image

from spritestrip.errors import InvalidArgumentsError, InvalidPathError
from spritestrip.services.layout_service import MIN_HEIGHT, OVERLAP_FRACTION

logger = logging.getLogger(__name__)

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


@dataclass(frozen=True)
class Settings:
    """Параметры проходов.

    Fields:
        overlap_fraction: Доля ширины предыдущего изображения под перекрытие (pass 3).
        min_height: Нижняя граница общей высоты полосы, px (pass 3).
        border_px: Ширина рамки вокруг изображения перед заливкой (pass 1).
        fuzz: Допуск заливки, доля от 0 до 1 (pass 1).
        resample: Фильтр ресайза: nearest | bilinear | bicubic | lanczos.
    """
    overlap_fraction: float = OVERLAP_FRACTION
    min_height: int = MIN_HEIGHT
    border_px: int = 5
    fuzz: float = 0.5
    resample: str = "bilinear"

    @property
    def resample_filter(self) -> Image.Resampling:
        return RESAMPLE_FILTERS[self.resample]

    def validate(self) -> "Settings":
        if not math.isfinite(self.overlap_fraction):
            raise InvalidArgumentsError(
                f"overlap_fraction должен быть конечным числом, получено {self.overlap_fraction}"
            )
        if self.min_height < 1:
            raise InvalidArgumentsError(f"min_height должен быть >= 1, получено {self.min_height}")
        if self.border_px < 0:
            raise InvalidArgumentsError(f"border_px должен быть >= 0, получено {self.border_px}")
        if not 0.0 <= self.fuzz <= 1.0:
            raise InvalidArgumentsError(f"fuzz должен быть в [0, 1], получено {self.fuzz}")
        if self.resample not in RESAMPLE_FILTERS:
            raise InvalidArgumentsError(
                f"resample должен быть одним из {', '.join(RESAMPLE_FILTERS)}, получено {self.resample!r}"
            )
        return self


_FIELD_TYPES = {
    "overlap_fraction": (int, float),
    "min_height": (int,),
    "border_px": (int,),
    "fuzz": (int, float),
    "resample": (str,),
}


def _coerce(raw: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Неизвестный ключ в конфиге проигнорирован: %s", key)
            continue
        # bool — подкласс int, его не принимаем
        if isinstance(value, bool) or not isinstance(value, _FIELD_TYPES[key]):
            raise InvalidArgumentsError(f"Неверный тип для {key}: {value!r}")
        values[key] = float(value) if key in ("overlap_fraction", "fuzz") else value
    return values


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """Загружает настройки из YAML; без пути — значения по умолчанию.

    Raises:
        InvalidPathError: файл не найден.
        InvalidArgumentsError: битый YAML, не словарь или неверные значения.
    """
    if path is None:
        return Settings()

    config_path = Path(path)
    if not config_path.is_file():
        raise InvalidPathError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            where = ""
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                where = f" (строка {mark.line + 1}, столбец {mark.column + 1})"
            raise InvalidArgumentsError(f"Не удалось разобрать {config_path}{where}: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidArgumentsError(f"{config_path}: ожидался словарь настроек")

    settings = replace(Settings(), **_coerce(raw)).validate()
    logger.debug("Настройки из %s: %s", config_path, settings)
    return settings
