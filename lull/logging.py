import logging.config

from lull.settings import DebounceSettings, LogLevel, get_settings

LOGGER = "lull"


def setup_logging(
    settings: DebounceSettings | None = None,
    levels: dict[str, LogLevel] | None = None,
):
    """Attach a handler to the `lull` logger tree.

    Output goes to `settings.log_file` when set, stderr otherwise, at
    `settings.log_level`. `levels` overrides single modules, e.g.
    ``{"lull.functools": "DEBUG"}``. Loggers outside the tree are left alone.
    """
    settings = settings or get_settings()

    if settings.log_file is not None:
        handler = {
            "class": "logging.FileHandler",
            "filename": settings.log_file,
            "mode": "a",
        }
    else:
        handler = {"class": "logging.StreamHandler"}

    loggers = {
        LOGGER: {
            "handlers": [LOGGER],
            "level": settings.log_level,
            "propagate": False,
        },
    }
    for name, level in (levels or {}).items():
        if name != LOGGER and not name.startswith(f"{LOGGER}."):
            raise ValueError(f"{name} is not a {LOGGER} logger")
        loggers[name] = {"level": level}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                # timers fire on their own threads
                LOGGER: {
                    "format": "{asctime} {levelname:<7} {threadName:<12} {name} {message}",
                    "style": "{",
                },
            },
            "handlers": {LOGGER: {**handler, "formatter": LOGGER}},
            "loggers": loggers,
        }
    )
