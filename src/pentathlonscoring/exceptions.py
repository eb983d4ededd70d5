"""Exceptions for use in Pentathlon Scoring"""

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


# ========== Base Application Exception ==========


class PentathlonScoringException(Exception):
    """Base exception for all Pentathlon Scoring errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Scoring Exceptions ==========


class ScoringException(PentathlonScoringException):
    """Base exception for score recording errors."""

    pass


class UnknownDisciplineException(ScoringException):
    """Raised when a score is submitted for a discipline that has no calculator."""

    pass


# ========== Bracket Exceptions ==========


class BracketException(PentathlonScoringException):
    """Base exception for direct elimination bracket errors."""

    pass


class InvalidSeedException(BracketException):
    """Raised when seed numbers are duplicated or not contiguous from 1."""

    pass


class InsufficientCompetitorsException(InvalidSeedException):
    """Raised when too few seeds are supplied to build a bracket."""

    pass


class MatchNotFoundException(BracketException):
    """Raised when a match id does not exist in the bracket."""

    pass


class MatchNotReadyException(BracketException):
    """Raised when a result is submitted for a bye or a match missing an athlete."""

    pass


class InvalidResultException(BracketException):
    """Raised when a submitted match result is invalid."""

    pass


class TiedResultException(InvalidResultException):
    """Raised when both athletes have the same score; bouts need a strict winner."""

    pass


class BracketIncompleteException(BracketException):
    """Raised when final placements are requested before the final is decided."""

    pass


class BracketFormatException(BracketException):
    """Raised when serialized bracket text cannot be decoded."""

    pass


class BracketNotFoundException(BracketException):
    """Raised when no bracket exists for the requested group."""

    pass


# ========== Notifier Exceptions ==========


class NotifierException(PentathlonScoringException):
    """Base exception for score change notifier errors."""

    pass


class NotifierClosedException(NotifierException):
    """Raised when subscribing to a notifier that has been shut down."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(PentathlonScoringException):
    """Base exception for validation errors."""

    pass


class TimeFormatException(ValidationException):
    """Raised when a time string cannot be parsed."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(PentathlonScoringException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
