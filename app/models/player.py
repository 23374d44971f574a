from enum import Enum

from pydantic import BaseModel, Field

from .sport import MatchResult

DEFAULT_ELO = 1500


def sport_key(sport: "str | Enum") -> str:
    """Return the key a sport is stored under in a profile's ``elo`` mapping."""
    return sport.value if isinstance(sport, Enum) else sport


class Player(BaseModel):
    """A rated player as seen by the Elo calculator."""

    id: str
    name: str = ""
    elo: dict[str, int] = Field(default_factory=dict)

    def rating_for(self, sport: "str | Enum") -> int:
        """Return the player's rating for ``sport``, 1500 if never played."""
        return self.elo.get(sport_key(sport), DEFAULT_ELO)


class Team(BaseModel):
    players: list[Player]


class EloUpdate(BaseModel):
    player_id: str
    elo_before: int
    elo_after: int
    elo_change: int


class MatchPrediction(BaseModel):
    team_a_win_probability: float
    team_b_win_probability: float
    elo_advantage: float


class TeamMatch(BaseModel):
    """Two teams, the sport they played and the declared result."""

    team_a: Team
    team_b: Team
    sport: str
    result: MatchResult
