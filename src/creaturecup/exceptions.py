"""Exceptions for use in Creature Cup"""

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


# ========== Base Application Exception ==========


class CreatureCupException(Exception):
    """Base exception for all Creature Cup errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Invalid Input Exceptions ==========


class InvalidInputException(CreatureCupException):
    """Base exception for caller errors.

    Raised before any state is written, so the stored tournament is unchanged.
    """

    pass


class InvalidIdentifierException(InvalidInputException):
    """Raised when a competitor or tournament identifier is malformed."""

    pass


class InvalidParticipantsException(InvalidInputException):
    """Raised when a participant list is empty, duplicated or the wrong size."""

    pass


class ParticipantNotFoundException(InvalidInputException):
    """Raised when a competitor is not part of the tournament."""

    pass


class InvalidResultException(InvalidInputException):
    """Raised when an outcome or winner is invalid for the match."""

    pass


class DuplicateResultException(InvalidResultException):
    """Raised when attempting to record a result that already exists."""

    pass


class BracketMatchNotFoundException(InvalidInputException):
    """Raised when a bracket match id does not exist."""

    pass


# ========== Tournament State Exceptions ==========


class TournamentStateException(CreatureCupException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class TournamentNotFoundException(TournamentStateException):
    """Raised when a requested tournament does not exist."""

    pass


class TournamentCompleteException(TournamentStateException):
    """Raised when mutating qualification of a tournament that is already complete."""

    pass


class TournamentNotCompleteException(TournamentStateException):
    """Raised when an operation needs qualification to be finished first."""

    pass


class RoundIncompleteException(TournamentStateException):
    """Raised when advancing past a round that still has unrecorded pairings."""

    pass


class InsufficientQualifiersException(TournamentStateException):
    """Raised when there are too few participants to fill the playoff."""

    pass


class BracketNotInitializedException(TournamentStateException):
    """Raised when a bracket operation runs before the bracket exists."""

    pass


class ConcurrentModificationException(TournamentStateException):
    """Raised when a save is based on a stale version of the stored data."""

    pass


# ========== Storage Exceptions ==========


class StorageException(CreatureCupException):
    """Raised when stored data cannot be read back."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CreatureCupException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass
