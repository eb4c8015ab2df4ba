"""
Entry point and logging setup.

Library code only ever calls ``structlog.get_logger``; this module decides
how those log lines are rendered. The CLI calls ``configure_logging()`` before
building an engine. Games embedding npcaffect may call it too, or configure
structlog themselves.
"""

from __future__ import annotations

import logging

import structlog

_logging_configured = False


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog and standard-library logging.

    Safe to call more than once; only the first call has an effect.
    """
    global _logging_configured  # noqa: PLW0603
    if _logging_configured:
        return
    _logging_configured = True

    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def main() -> None:
    from npcaffect.cli.app import cli

    cli()


if __name__ == "__main__":
    main()
