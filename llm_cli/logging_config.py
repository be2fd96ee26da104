import logging


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; stdout stays free for the indicator and answers.

    basicConfig writes to stderr. When a handler is already installed (pytest's
    capture, an embedding application) only the level is adjusted.
    """
    chosen = (level or "WARNING").upper()
    lvl = getattr(logging, chosen, logging.WARNING)
    root = logging.getLogger()

    if not root.handlers:
        logging.basicConfig(
            format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            level=lvl,
        )
    else:
        root.setLevel(lvl)
