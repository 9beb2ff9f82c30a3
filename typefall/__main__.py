from __future__ import annotations

import logging

from textual.logging import TextualHandler

from .app import TypefallApp
from .config import load_settings


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, handlers=[TextualHandler()])
    TypefallApp(settings=settings).run()


if __name__ == "__main__":
    main()
