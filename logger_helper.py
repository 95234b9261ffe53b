import logging


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger for ``name``, or the package logger when omitted."""
    return logging.getLogger(name or "gridstate")


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
