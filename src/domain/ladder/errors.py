"""Typed rejections raised by the ladder result pipeline.

Every error carries a player-facing ``message``; callers translate the error
kind into UI text and must not expose anything beyond it.
"""

from __future__ import annotations


class LadderError(Exception):
    """Base class for all ladder submission failures."""

    message = "The submission could not be processed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class PlayerNotFoundError(LadderError):
    message = "The player was not found in the database."


class ClientNotInvolvedError(LadderError):
    message = "None of the client's registered characters were found in the replay participant list."


class InvalidParticipantsError(LadderError):
    message = "All participants of a game must be registered."


class InvalidMapError(LadderError):
    message = "Matches must be on a valid map in the map pool."


class InvalidFormatError(LadderError):
    message = "Matches must be a 1v1 with no observers."


class DuplicateReplayError(LadderError):
    message = "The provided replay has been processed previously."


class GameTooShortError(LadderError):
    message = "The provided game was too short."


class WrongOpponentError(LadderError):
    message = "The provided game was not against your matchmade opponent. You have been forfeited."


class WrongMapError(LadderError):
    message = "The provided game was not on the correct map."


class StorageError(LadderError):
    message = "The result could not be saved. Please try again later."


class MapVetoLimitError(LadderError):
    message = "You have already vetoed the maximum number of maps."


__all__ = [
    "ClientNotInvolvedError",
    "DuplicateReplayError",
    "GameTooShortError",
    "InvalidFormatError",
    "InvalidMapError",
    "InvalidParticipantsError",
    "LadderError",
    "MapVetoLimitError",
    "PlayerNotFoundError",
    "StorageError",
    "WrongMapError",
    "WrongOpponentError",
]
