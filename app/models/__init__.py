from .sport import Sport, MatchResult, TeamSide
from .player import DEFAULT_ELO, Player, Team, EloUpdate, MatchPrediction, TeamMatch, sport_key

__all__ = [
    'Sport',
    'MatchResult',
    'TeamSide',
    'Player',
    'Team',
    'EloUpdate',
    'MatchPrediction',
    'TeamMatch',
    'DEFAULT_ELO',
    'sport_key',
]
