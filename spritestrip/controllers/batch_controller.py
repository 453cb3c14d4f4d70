"""Контроллер пакетной обработки: проверки перед запуском и выполнение прохода.

SOLID:
- SRP: класс связывает файловую систему с сервисами (без логики обработки пикселей).
- DIP: обработка делегируется `ProcessService`, ввод-вывод — `ImageService`.
Clean Code:
- Все проверки выполняются до первой записи на диск.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from PIL import Image

from spritestrip.config import Settings
from spritestrip.errors import (
    InvalidPathError,
    NoImagesFoundError,
    NotWritableError,
    UnsupportedPassError,
)
from spritestrip.services.image_service import ImageService
from spritestrip.services.process_service import ProcessService

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")
JPEG_SUFFIXES = (".jpg", ".jpeg")

PASS_DESCRIPTIONS: Dict[int, str] = {
    1: "Remove the background from all images in FOLDER and place new images in the OUTPUT folder",
    2: "Trim transparent area on the edges of all images in FOLDER and place new images in OUTPUT",
    3: "Assemble images in FOLDER into a single OUTPUT file (a PNG with transparent background)",
}
PASS_CHOICES = tuple(str(number) for number in PASS_DESCRIPTIONS)


def parse_pass(value: Optional[str | int]) -> int:
    """Номер прохода из строки CLI: ровно "1", "2" или "3"."""
    text = str(value)
    if text not in PASS_CHOICES:
        raise UnsupportedPassError(f"Pass {value} not supported")
    return int(text)


def _has_suffix(name: str, suffixes: Tuple[str, ...]) -> bool:
    # по имени, а не Path.suffix: у файла ".png" suffix пустой
    return name.lower().endswith(suffixes)


def list_images(folder: Path) -> List[Path]:
    """PNG/JPEG файлы папки, отсортированные по имени.

    Порядок сортировки — это порядок обработки и склейки.
    """
    try:
        entries = list(folder.iterdir())
    except OSError as exc:
        raise InvalidPathError(f"Failed to read images in {folder}: {exc}") from exc
    images = [p for p in entries if _has_suffix(p.name, IMAGE_SUFFIXES) and p.is_file()]
    return sorted(images, key=lambda p: p.name)


def output_name(path: Path) -> str:
    """Имя выходного файла: .jpg/.jpeg заменяется на .png."""
    name = path.name
    for suffix in JPEG_SUFFIXES:
        if _has_suffix(name, (suffix,)):
            return name[: -len(suffix)] + ".png"
    return name


def ensure_png_suffix(path: Path) -> Path:
    if _has_suffix(path.name, (".png",)):
        return path
    return path.with_name(path.name + ".png")


def _check_writable(directory: Path) -> None:
    if not os.access(directory, os.W_OK):
        raise NotWritableError(f"{directory} is not writable")


@dataclass
class BatchController:
    """Выполняет один проход над папкой изображений.

    Ответственности:
    - Проверка папки, выходного пути и номера прохода (`prepare`).
    - Последовательная обработка по одному файлу (проходы 1 и 2).
    - Сборка полосы «всё или ничего» (проход 3).
    """
    folder: Path
    output: Path
    pass_number: int
    settings: Settings = field(default_factory=Settings)

    _image_service: ImageService = field(default_factory=ImageService, init=False, repr=False)
    _process_service: ProcessService = field(init=False, repr=False)
    _images: List[Path] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.folder = Path(self.folder)
        self.output = Path(self.output)
        self._process_service = ProcessService(settings=self.settings, image_service=self._image_service)

    # ---- Pre-flight ----
    def prepare(self) -> List[Path]:
        """Проверки до начала обработки; возвращает список изображений.

        Raises:
            UnsupportedPassError, InvalidPathError, NotWritableError, NoImagesFoundError.
        """
        if self.pass_number not in PASS_DESCRIPTIONS:
            raise UnsupportedPassError(f"Pass {self.pass_number} not supported")

        if not self.folder.exists() or not self.folder.is_dir():
            raise InvalidPathError(
                f"{self.folder} is not a directory or you don't have permission to access it"
            )
        self.folder = self.folder.resolve()

        if self.pass_number == 3:
            self._prepare_output_file()
        else:
            self._prepare_output_dir()

        images = list_images(self.folder)
        if not images:
            raise NoImagesFoundError(f"No PNG or JPEG images found in {self.folder}")
        logger.info("Found images: %s", ", ".join(p.name for p in images))
        self._images = images
        return images

    def _prepare_output_dir(self) -> None:
        if not self.output.exists():
            logger.info("%s is not a directory, creating…", self.output)
            self.output.mkdir(parents=True, exist_ok=True)
        elif not self.output.is_dir():
            raise InvalidPathError(
                f"{self.output} is not a directory or you don't have permission to access it"
            )
        _check_writable(self.output)

    def _prepare_output_file(self) -> None:
        target = ensure_png_suffix(self.output)
        if target.is_dir():
            raise InvalidPathError(f"{target} is a directory, expected an output file path")
        parent = target.parent
        if not parent.exists():
            logger.info("%s is not a directory, creating…", parent)
            parent.mkdir(parents=True, exist_ok=True)
        elif not parent.is_dir():
            raise InvalidPathError(f"{parent} is not a directory")
        _check_writable(parent)
        if target.exists() and not os.access(target, os.W_OK):
            raise NotWritableError(f"{target} is not writable")
        self.output = target

    # ---- Passes ----
    def run(self) -> List[Path]:
        """Выполняет проход; возвращает записанные файлы."""
        if not self._images:
            self.prepare()
        if self.pass_number == 1:
            written = self._manipulate(self._process_service.remove_background)
        elif self.pass_number == 2:
            written = self._manipulate(self._process_service.trim_transparent_border)
        else:
            written = [self.assemble(self._images, self.output)]
        logger.info("Pass %d completed successfully", self.pass_number)
        return written

    def _manipulate(self, transform: Callable[[Image.Image], Image.Image]) -> List[Path]:
        """Применяет `transform` к каждому файлу по очереди.

        Ошибка на файле N прерывает очередь; файлы до N остаются записанными.
        """
        written: List[Path] = []
        for path in self._images:
            image_data = self._image_service.load_image(path)
            result = transform(image_data.pil_image)
            written.append(self._image_service.save_png(result, self.output / output_name(path)))
        return written

    def assemble(self, paths: List[Path], destination: Path) -> Path:
        """Проход 3: все файлы читаются до сборки, запись — одна в конце."""
        images = [self._image_service.load_image(p) for p in paths]
        strip = self._process_service.assemble(images)
        return self._image_service.save_png(strip, ensure_png_suffix(destination))
