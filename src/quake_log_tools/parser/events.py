"""
Typed events read from a Quake 3 games.log.

Each log keyword the parser understands maps to one Event subclass. The
means-of-death codes follow the order of the game's meansOfDeath_t enum.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import MalformedIdentity

# Attacker id the server uses for deaths caused by the map (falling, lava, ...)
WORLD_ID = 1022


class MeansOfDeath(Enum):
    """Cause of a kill as reported in the third numeric field of a Kill line."""
    MOD_UNKNOWN = 0
    MOD_SHOTGUN = 1
    MOD_GAUNTLET = 2
    MOD_MACHINEGUN = 3
    MOD_GRENADE = 4
    MOD_GRENADE_SPLASH = 5
    MOD_ROCKET = 6
    MOD_ROCKET_SPLASH = 7
    MOD_PLASMA = 8
    MOD_PLASMA_SPLASH = 9
    MOD_RAILGUN = 10
    MOD_LIGHTNING = 11
    MOD_BFG = 12
    MOD_BFG_SPLASH = 13
    MOD_WATER = 14
    MOD_SLIME = 15
    MOD_LAVA = 16
    MOD_CRUSH = 17
    MOD_TELEFRAG = 18
    MOD_FALLING = 19
    MOD_SUICIDE = 20
    MOD_TARGET_LASER = 21
    MOD_TRIGGER_HURT = 22
    MOD_NAIL = 23
    MOD_CHAINGUN = 24
    MOD_PROXIMITY_MINE = 25
    MOD_KAMIKAZE = 26
    MOD_JUICED = 27
    MOD_GRAPPLE = 28

    @classmethod
    def from_code(cls, code: int) -> "MeansOfDeath":
        """
        Map a numeric cause code to its MeansOfDeath member.

        Args:
            code: Cause code from a Kill line.

        Returns:
            The matching member, or MOD_UNKNOWN for codes outside the known range.
        """
        try:
            return cls(code)
        except ValueError:
            return cls.MOD_UNKNOWN


@dataclass(frozen=True)
class Event:
    """Base class for all log events."""
    line_number: Optional[int] = field(default=None, compare=False, kw_only=True)


@dataclass(frozen=True)
class MatchStart(Event):
    pass


@dataclass(frozen=True)
class MatchEnd(Event):
    pass


@dataclass(frozen=True)
class PlayerConnected(Event):
    player_id: int


@dataclass(frozen=True)
class PlayerBegan(Event):
    player_id: int


@dataclass(frozen=True)
class PlayerIdentityChanged(Event):
    player_id: int
    raw_info: str


@dataclass(frozen=True)
class PlayerDisconnected(Event):
    player_id: int


@dataclass(frozen=True)
class Kill(Event):
    attacker_id: int
    victim_id: int
    cause_code: int

    @property
    def means_of_death(self) -> MeansOfDeath:
        return MeansOfDeath.from_code(self.cause_code)


def parse_player_name(raw_info: str) -> str:
    """
    Extract the display name from a ClientUserinfoChanged payload.

    The payload is a backslash separated key/value list starting with the
    name, e.g. ``n\\Isgalamido\\t\\0\\model\\xian/default\\...``.

    Args:
        raw_info: Payload following the player id.

    Returns:
        The player's display name.

    Raises:
        MalformedIdentity: If the payload has fewer than three backslash separated parts.
    """
    parts = raw_info.split('\\', 2)
    if len(parts) < 3:
        raise MalformedIdentity(raw_info)
    return parts[1]
