# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Runtime configuration read from ``GEMMKIT_*`` environment variables."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["GemmkitConfig", "load_config", "parse_log_level"]

DEFAULT_BACKEND = "cpu"
DEFAULT_LOG_LEVEL = "WARNING"


def parse_log_level(name: str) -> int:
    """Convert a level name such as ``"debug"`` to its ``logging`` constant.

    Raises:
        ValueError: If ``name`` is not a standard level name.
    """
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {name}")
    return level


@dataclass(frozen=True)
class GemmkitConfig:
    """Settings shared by the command line and benchmark entry points.

    Attributes:
        backend: Registered backend name used for products.
        log_level: ``logging`` level constant.
        log_file: Log destination, or None for stderr.
    """

    backend: str = DEFAULT_BACKEND
    log_level: int = logging.WARNING
    log_file: str | None = None


def load_config(environ: Mapping[str, str] | None = None) -> GemmkitConfig:
    """Build a config from ``GEMMKIT_BACKEND``, ``GEMMKIT_LOG_LEVEL`` and ``GEMMKIT_LOG_FILE``.

    Args:
        environ: Environment mapping, defaults to ``os.environ``.

    Raises:
        ValueError: If ``GEMMKIT_LOG_LEVEL`` is not a valid level name.
    """
    if environ is None:
        environ = os.environ
    return GemmkitConfig(
        backend=environ.get("GEMMKIT_BACKEND", DEFAULT_BACKEND),
        log_level=parse_log_level(environ.get("GEMMKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        log_file=environ.get("GEMMKIT_LOG_FILE") or None,
    )
