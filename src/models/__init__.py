"""ORM models."""

from models.base import Base
from models.map import Map, MapVeto
from models.match_result import MatchResult, MatchResultPlayer, MatchResultSource
from models.player import Character, Player

__all__ = [
    "Base",
    "Character",
    "Map",
    "MapVeto",
    "MatchResult",
    "MatchResultPlayer",
    "MatchResultSource",
    "Player",
]
