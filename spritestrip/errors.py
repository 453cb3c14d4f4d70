"""Ошибки spritestrip.

Все ошибки наследуют `SpriteStripError` и несут код выхода для CLI.
Сервисы только поднимают исключения; перехват и перевод в код выхода
происходит в одном месте — `spritestrip.cli.main`.
"""
from __future__ import annotations

from pathlib import Path


class SpriteStripError(Exception):
    """Базовая ошибка приложения."""

    exit_code: int = 1


class InvalidPathError(SpriteStripError, FileNotFoundError):
    """Папка или выходной путь не существует, не каталог или недоступен."""


class NotWritableError(SpriteStripError):
    """Нет прав на запись в выходной каталог."""


class NoImagesFoundError(SpriteStripError):
    """В папке нет PNG/JPEG изображений."""


class DecodeError(SpriteStripError, ValueError):
    """Файл не удалось распознать как изображение."""

    def __init__(self, path: str | Path, reason: str | None = None) -> None:
        self.path = Path(path)
        message = f"Не удалось прочитать изображение: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidArgumentsError(SpriteStripError, ValueError):
    """Некорректные аргументы (scale_resize, настройки)."""


class UnsupportedPassError(SpriteStripError):
    """Значение --pass вне {1, 2, 3}."""


class EmptyInputError(SpriteStripError):
    """Компоновщик вызван с пустым списком изображений."""
