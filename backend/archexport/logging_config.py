import logging

from archexport.config import LOG_LEVEL

_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install a root handler once; later calls only adjust the level."""
    global _configured

    if not _configured:
        logging.basicConfig(
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        _configured = True

    logging.getLogger("archexport").setLevel(level.upper())
