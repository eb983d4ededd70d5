"""Shared helpers for Pentathlon Scoring."""

# Pentathlon Scoring
# Copyright (C) 2025  Pentathlon Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import math
import os

LOG_LEVEL_ENV_VAR = "PENTATHLON_SCORING_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_ROOT_LOGGER_NAME = "pentathlonscoring"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the package root logger.

    The root handler is installed once; repeated calls never add duplicate
    handlers.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    _configure_root_logger()
    return logging.getLogger(name)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)
