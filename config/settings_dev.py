from __future__ import annotations

from .settings_base import *  # noqa: F403

# Development defaults
DEBUG = env.bool("DEBUG", default=True)  # type: ignore[name-defined]  # noqa: F405

# Placement emails go to the console unless an SMTP backend is configured
EMAIL_BACKEND = env(  # type: ignore[name-defined]  # noqa: F405
    "EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")

LOGGING["loggers"]["standing_orders"] = {  # type: ignore[name-defined]  # noqa: F405
    "handlers": ["console"],
    "level": "DEBUG",
    "propagate": False,
}
