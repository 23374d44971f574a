from enum import Enum


class Sport(str, Enum):
    """Sports a player can hold a rating in.

    Mirrors the ``sport_type`` enum of the database, including the German
    additions that came in with the imported place data.
    """

    TENNIS = "tennis"
    BASKETBALL = "basketball"
    VOLLEYBALL = "volleyball"
    SPIKEBALL = "spikeball"
    BADMINTON = "badminton"
    SQUASH = "squash"
    PICKLEBALL = "pickleball"
    FUSSBALL = "fußball"
    TISCHTENNIS = "tischtennis"
    BOULE = "boule"
    SKATEPARK = "skatepark"


class MatchResult(str, Enum):
    TEAM_A = "team_a"
    TEAM_B = "team_b"
    DRAW = "draw"


class TeamSide(str, Enum):
    TEAM_A = "team_a"
    TEAM_B = "team_b"
