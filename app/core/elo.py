"""
Team-based Elo rating arithmetic.

Every function here is pure: no I/O, no shared state. Callers are expected to
hand in non-empty teams; roster validation lives in ``app.core.matches``.
"""

import math

from app.models import EloUpdate, MatchPrediction, MatchResult, Player, Team, TeamMatch, sport_key

ELO_SCALE = 400

# actual score for (team A, team B) per declared result
ACTUAL_SCORES: dict[MatchResult, tuple[float, float]] = {
    MatchResult.TEAM_A: (1.0, 0.0),
    MatchResult.TEAM_B: (0.0, 1.0),
    MatchResult.DRAW: (0.5, 0.5),
}


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties going away from zero.

    Unlike the built-in ``round``, 0.5 goes to 1 and -0.5 goes to -1.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class EloCalculator:
    """Elo rating calculator for matches between two teams of any size."""

    @staticmethod
    def get_k_factor(team_size: int) -> int:
        """
        K-factor based on team size.

        Singles (1 player): 32
        Small teams (2-3 players): 26
        Large teams (4+ players): 18
        """
        if team_size == 1:
            return 32
        if 2 <= team_size <= 3:
            return 26
        return 18

    @staticmethod
    def get_team_average_elo(team: Team, sport: str) -> float:
        """Average rating of the team's players for a sport."""
        total = sum(player.rating_for(sport) for player in team.players)
        return total / len(team.players)

    @staticmethod
    def calculate_expected_score(player_elo: float, opponent_elo: float) -> float:
        """E_A = 1 / (1 + 10^((R_B - R_A) / 400))"""
        return 1 / (1 + 10 ** ((opponent_elo - player_elo) / ELO_SCALE))

    @staticmethod
    def calculate_new_elo(
        current_elo: float, expected_score: float, actual_score: float, k_factor: int
    ) -> int:
        """New_Elo = Old_Elo + K * (Actual_Score - Expected_Score)"""
        return round_half_away_from_zero(current_elo + k_factor * (actual_score - expected_score))

    @classmethod
    def _team_updates(
        cls,
        players: list[Player],
        sport: str,
        expected_score: float,
        actual_score: float,
        k_factor: int,
    ) -> list[EloUpdate]:
        updates = []
        for player in players:
            current_elo = player.rating_for(sport)
            new_elo = cls.calculate_new_elo(current_elo, expected_score, actual_score, k_factor)
            updates.append(
                EloUpdate(
                    player_id=player.id,
                    elo_before=current_elo,
                    elo_after=new_elo,
                    elo_change=new_elo - current_elo,
                )
            )
        return updates

    @classmethod
    def update_team_elo(cls, match: TeamMatch) -> list[EloUpdate]:
        """Compute the rating update of every player in a match.

        Each side uses the K-factor of its own size, so a 1-vs-4 match moves
        the solo player by up to 32 points and each of the four by up to 18.
        Updates are returned team A first, then team B.
        """
        team_a, team_b, sport = match.team_a, match.team_b, match.sport
        elo_a = cls.get_team_average_elo(team_a, sport)
        elo_b = cls.get_team_average_elo(team_b, sport)

        expected_a = cls.calculate_expected_score(elo_a, elo_b)
        expected_b = 1 - expected_a

        actual_a, actual_b = ACTUAL_SCORES[MatchResult(match.result)]

        k_factor_a = cls.get_k_factor(len(team_a.players))
        k_factor_b = cls.get_k_factor(len(team_b.players))

        return cls._team_updates(
            team_a.players, sport, expected_a, actual_a, k_factor_a
        ) + cls._team_updates(team_b.players, sport, expected_b, actual_b, k_factor_b)

    @classmethod
    def predict_match_outcome(cls, team_a: Team, team_b: Team, sport: str) -> MatchPrediction:
        elo_a = cls.get_team_average_elo(team_a, sport)
        elo_b = cls.get_team_average_elo(team_b, sport)

        team_a_win_probability = cls.calculate_expected_score(elo_a, elo_b)
        return MatchPrediction(
            team_a_win_probability=team_a_win_probability,
            team_b_win_probability=1 - team_a_win_probability,
            elo_advantage=elo_a - elo_b,
        )

    @classmethod
    def simulate_elo_change(
        cls, team_a: Team, team_b: Team, sport: str, result: MatchResult
    ) -> list[EloUpdate]:
        """Rating changes a result would cause, for previews. Nothing is applied."""
        return cls.update_team_elo(
            TeamMatch(team_a=team_a, team_b=team_b, sport=sport_key(sport), result=result)
        )
