"""CLI module for patch-facts.

Command-line options fall back to environment variables, so the tool can be
driven from cron or systemd units without arguments.
"""

from .main import (
    Config,
    build_config,
    cli,
    evaluate_boolean,
    main,
    run_pipeline,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run_pipeline",
    "evaluate_boolean",
]
