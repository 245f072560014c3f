"""CLI module for glicense.

This module provides the command-line interface for glicense.
It supports both CLI arguments and environment variables for configuration.
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
