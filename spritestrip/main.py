"""Точка входа в приложение."""
import sys

from spritestrip.cli import main as cli_main


def main() -> None:
    """Разбирает аргументы, выполняет проход и завершает процесс с кодом выхода."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
