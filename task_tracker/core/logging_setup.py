import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", *, db_echo: bool = False) -> None:
    """
    Configure the root logger with a single stderr handler.

    Safe to call more than once (tests build several apps per process):
    handlers installed by an earlier call are replaced, not stacked.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for h in list(root.handlers):
        if getattr(h, "_task_tracker", False):
            root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._task_tracker = True
    root.addHandler(handler)

    # SQL statements only when explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if db_echo else logging.WARNING)
    # passlib complains about newer bcrypt builds missing __about__
    logging.getLogger("passlib").setLevel(logging.ERROR)
