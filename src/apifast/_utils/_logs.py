import logging
import sys

logger: logging.Logger = logging.getLogger("apifast")


def setup_logging(should_debug: bool = False) -> None:
    """Attach a stderr handler to the ``apifast`` logger.

    The library never configures logging on its own; call this (or set
    ``APIFAST_DEBUG``) to see request and response traces.
    """
    if not any(getattr(h, "_apifast_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._apifast_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)
