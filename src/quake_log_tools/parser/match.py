"""
Match state and statistics.

MatchAccumulator replays the events of one match segment and keeps the
running roster, kill scores and means-of-death histogram. Scores are
updated on every Kill, keyed by the player's name at the time of the kill,
so a player who renames mid-match keeps the score earned under the old name.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .errors import DuplicateConnection, UnknownAttacker, UnknownPlayer, UnknownVictim
from .events import (
    WORLD_ID,
    Event,
    Kill,
    MatchEnd,
    MatchStart,
    MeansOfDeath,
    PlayerBegan,
    PlayerConnected,
    PlayerDisconnected,
    PlayerIdentityChanged,
    parse_player_name,
)

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """A client connected during one match."""
    id: int
    name: str = ""
    active: bool = False


@dataclass
class MatchSummary:
    """Final statistics of one match."""
    total_kills: int = 0
    players: List[str] = field(default_factory=list)
    kills: Dict[str, int] = field(default_factory=dict)
    means_of_death: Dict[MeansOfDeath, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Render the summary in its JSON shape.

        Returns:
            Dictionary with total_kills, players, kills and means_of_death keys.
        """
        return {
            "total_kills": self.total_kills,
            "players": list(self.players),
            "kills": dict(self.kills),
            "means_of_death": {mode.name: count for mode, count in self.means_of_death.items()},
        }


class MatchAccumulator:
    """
    Replays the events of a single match.

    One instance is used per segment; nothing carries over between matches.
    """

    def __init__(self, world_id: int = WORLD_ID) -> None:
        self.world_id = world_id
        self.total_kills = 0
        self.players: List[Player] = []
        self.kill_score: Dict[str, int] = {}
        self.means_of_death: Dict[MeansOfDeath, int] = {}
        self._index: Dict[int, int] = {}

        self._handlers = {
            MatchStart: self._ignore,
            MatchEnd: self._ignore,
            PlayerConnected: self._on_connect,
            PlayerBegan: self._on_begin,
            PlayerIdentityChanged: self._on_identity_changed,
            PlayerDisconnected: self._on_disconnect,
            Kill: self._on_kill,
        }

    def find_player(self, player_id: int) -> Optional[Player]:
        index = self._index.get(player_id)
        return self.players[index] if index is not None else None

    def _get_player(self, player_id: int, error=UnknownPlayer) -> Player:
        player = self.find_player(player_id)
        if player is None:
            raise error(player_id)
        return player

    def apply(self, event: Event) -> None:
        """
        Apply one event to the match state.

        Args:
            event: The event to apply.

        Raises:
            MatchError: If the event references an unknown player, reconnects an
                active player or carries an unparseable identity.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")
        handler(event)

    def apply_all(self, events: Iterable[Event]) -> "MatchAccumulator":
        for event in events:
            self.apply(event)
        return self

    def _ignore(self, event: Event) -> None:
        pass

    def _on_connect(self, event: PlayerConnected) -> None:
        player = self.find_player(event.player_id)
        if player is None:
            self._index[event.player_id] = len(self.players)
            self.players.append(Player(event.player_id))
            return
        if player.active:
            raise DuplicateConnection(event.player_id)
        # reconnect keeps the original roster position
        logger.debug(f"Player {event.player_id} reconnected")

    def _on_begin(self, event: PlayerBegan) -> None:
        self._get_player(event.player_id).active = True

    def _on_identity_changed(self, event: PlayerIdentityChanged) -> None:
        name = parse_player_name(event.raw_info)
        self._get_player(event.player_id).name = name

    def _on_disconnect(self, event: PlayerDisconnected) -> None:
        player = self.find_player(event.player_id)
        if player is not None:
            player.active = False

    def _on_kill(self, event: Kill) -> None:
        self.total_kills += 1
        mode = event.means_of_death
        self.means_of_death[mode] = self.means_of_death.get(mode, 0) + 1

        if event.attacker_id == self.world_id:
            victim = self._get_player(event.victim_id, UnknownVictim)
            self._add_score(victim.name, -1)
        elif event.attacker_id != event.victim_id:
            attacker = self._get_player(event.attacker_id, UnknownAttacker)
            self._add_score(attacker.name, 1)

    def _add_score(self, name: str, delta: int) -> None:
        self.kill_score[name] = self.kill_score.get(name, 0) + delta

    def to_summary(self) -> MatchSummary:
        """
        Build the final statistics of the match.

        Returns:
            MatchSummary with player names in connection order.
        """
        return MatchSummary(
            total_kills=self.total_kills,
            players=[player.name for player in self.players],
            kills=dict(self.kill_score),
            means_of_death=dict(self.means_of_death),
        )
