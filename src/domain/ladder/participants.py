"""Resolve in-record participants to ladder players."""

from __future__ import annotations

from dataclasses import dataclass

from domain.ladder.protocol import IdentityResolver
from domain.ladder.replay import ReplayParticipant, parse_profile_url


@dataclass(frozen=True)
class ResolvedParticipant:
    character_id: int
    player_id: int
    race: str
    victory: bool


def resolve_participant(
    participant: ReplayParticipant,
    identities: IdentityResolver,
) -> ResolvedParticipant | None:
    """Return None when the participant's profile is unparseable or unregistered."""
    reference = parse_profile_url(participant.profile_url)
    if reference is None:
        return None

    character = identities.resolve(reference.region, reference.subregion, reference.profile_id)
    if character is None:
        return None

    return ResolvedParticipant(
        character_id=character.character_id,
        player_id=character.player_id,
        race=participant.race,
        victory=participant.victory,
    )


__all__ = ["ResolvedParticipant", "resolve_participant"]
