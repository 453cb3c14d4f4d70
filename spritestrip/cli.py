from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from spritestrip.config import load_settings
from spritestrip.controllers.batch_controller import PASS_DESCRIPTIONS, BatchController, parse_pass
from spritestrip.errors import SpriteStripError

logger = logging.getLogger("spritestrip")


def build_parser() -> argparse.ArgumentParser:
    pass_help = "Select which pass to run\n" + "\n".join(
        f"Pass {number}: {text}" for number, text in PASS_DESCRIPTIONS.items()
    )
    parser = argparse.ArgumentParser(
        prog="spritestrip",
        description="Sticks images together",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("folder", help="Folder with PNG/JPEG images")
    parser.add_argument("output", help="Output folder (passes 1, 2) or output file (pass 3)")
    # без choices: неверное значение должно давать код 1, а не 2 от argparse
    parser.add_argument("-p", "--pass", dest="pass_number", help=pass_help)
    parser.add_argument("-c", "--config", help="YAML file with processing settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        pass_number = parse_pass(args.pass_number)
        settings = load_settings(args.config)
        controller = BatchController(
            folder=Path(args.folder),
            output=Path(args.output),
            pass_number=pass_number,
            settings=settings,
        )
        controller.prepare()
        controller.run()
    except SpriteStripError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    return 0
