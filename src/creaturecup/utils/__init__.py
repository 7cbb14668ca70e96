"""Shared helpers for Creature Cup."""

# Creature Cup
# Copyright (C) 2025  Creature Cup developers
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

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "creaturecup"

# Silent unless the application configures logging
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``creaturecup`` package logger.

    No handler is attached here; records propagate to whatever the
    application (or :func:`configure_logging`) has set up.

    Args:
        name: Logger name, normally the calling module's ``__name__``

    Returns:
        The logger for ``name``
    """
    return logging.getLogger(name)


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Send Creature Cup log records to stderr at ``level``.

    Used by the command-line entry points. Calling it again only changes
    the level.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
    return root
