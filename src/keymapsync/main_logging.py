"""Logging configuration for keymapsync CLI."""
import logging

# Third-party loggers kept at INFO even with --verbose; the observer
# thread logs every raw inotify/FSEvents record at DEBUG.
QUIET_LOGGERS: tuple[str, ...] = ("watchdog",)


def configure_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity setting.

    Args:
        verbose: If True, set DEBUG level and include logger names;
            otherwise INFO level.

    Sync outcomes are logged at INFO, so they are visible by default.
    """
    level = logging.DEBUG if verbose else logging.INFO
    fmt = "%(levelname)s %(name)s: %(message)s" if verbose else "%(levelname)s: %(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[logging.StreamHandler()],
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
