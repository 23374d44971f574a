import asyncio
import logging
from typing import Any
from uuid import UUID

from app.core.elo import EloCalculator
from app.core.exceptions import (
    MatchError,
    MatchPersistenceError,
    MatchValidationError,
    PlayerResolutionError,
    RosterValidationError,
)
from app.models import (
    DEFAULT_ELO,
    EloUpdate,
    MatchResult,
    Player,
    Team,
    TeamMatch,
    TeamSide,
    sport_key,
)
from app.services.database import DatabaseService

logger = logging.getLogger(__name__)

RecordId = str | UUID


def validate_rosters(team_a_player_ids: list[str], team_b_player_ids: list[str]) -> None:
    """Reject empty teams and players listed twice, on one side or on both."""
    if not team_a_player_ids or not team_b_player_ids:
        raise RosterValidationError("Each team must have at least one player")
    if len(set(team_a_player_ids)) != len(team_a_player_ids) or len(set(team_b_player_ids)) != len(team_b_player_ids):
        raise RosterValidationError("A player cannot be listed twice on the same team")
    overlap = set(team_a_player_ids) & set(team_b_player_ids)
    if overlap:
        raise RosterValidationError(
            f"Players cannot be on both teams: {', '.join(sorted(overlap))}"
        )


def _profile_to_player(profile: dict[str, Any]) -> Player:
    return Player(
        id=str(profile["id"]),
        name=profile.get("name") or "",
        elo=profile.get("elo") or {},
    )


async def _resolve_teams(
    team_a_player_ids: list[str],
    team_b_player_ids: list[str],
    database: DatabaseService,
) -> tuple[Team, Team]:
    """Fetch every player's profile in one call and build both teams."""
    all_player_ids = team_a_player_ids + team_b_player_ids
    profiles = await database.get_profiles_by_ids(all_player_ids)
    players = {str(p["id"]): _profile_to_player(p) for p in profiles}

    missing = [pid for pid in all_player_ids if pid not in players]
    if missing:
        raise PlayerResolutionError(missing)

    team_a = Team(players=[players[pid] for pid in team_a_player_ids])
    team_b = Team(players=[players[pid] for pid in team_b_player_ids])
    return team_a, team_b


def _parse_result(result: MatchResult | str) -> MatchResult:
    try:
        return MatchResult(result)
    except ValueError:
        raise MatchValidationError(f"Unknown match result: {result}") from None


def _failure(error: MatchError) -> dict[str, Any]:
    return {"success": False, "error": str(error), "error_type": error.kind}


async def _apply_rating_update(
    update: EloUpdate,
    player: Player,
    sport: str,
    database: DatabaseService,
) -> str | None:
    """Write one player's new rating. Returns a warning message if it did not stick."""
    new_elo = {**player.elo, sport: update.elo_after}
    try:
        updated = await database.update_player_elo(update.player_id, new_elo, player.elo)
    except Exception as e:
        logger.exception("Failed to update %s rating of player %s", sport, update.player_id)
        return f"Failed to update rating of player {update.player_id}: {e}"

    if updated is None:
        logger.warning(
            "Rating of player %s changed during settlement, %s rating left at its current value",
            update.player_id,
            sport,
        )
        return f"Rating of player {update.player_id} changed concurrently and was not updated"
    return None


async def create_match(
    sport: str,
    team_a_player_ids: list[RecordId],
    team_b_player_ids: list[RecordId],
    result: MatchResult | str,
    court_id: RecordId | None = None,
    score: Any = None,
    database: DatabaseService | None = None,
) -> dict[str, Any]:
    """
    Settle a match: record it and apply the resulting Elo changes.

    Players are resolved and the updates computed before anything is written,
    and the match record is inserted before any rating, so a failure up to and
    including the match insert leaves no trace. Rating and participant writes
    that fail after that are reported under ``warnings``.
    """
    if database is None:
        database = DatabaseService()

    sport = sport_key(sport)
    team_a_ids = [str(pid) for pid in team_a_player_ids]
    team_b_ids = [str(pid) for pid in team_b_player_ids]

    try:
        result = _parse_result(result)
        validate_rosters(team_a_ids, team_b_ids)
        team_a, team_b = await _resolve_teams(team_a_ids, team_b_ids, database)

        elo_updates = EloCalculator.update_team_elo(
            TeamMatch(team_a=team_a, team_b=team_b, sport=sport, result=result)
        )

        match_data = {
            "court_id": str(court_id) if court_id else None,
            "sport": sport,
            "team_a_players": team_a_ids,
            "team_b_players": team_b_ids,
            "winner": result.value,
            "score": score,
        }
        try:
            match = await database.create_match(match_data)
        except Exception as e:
            logger.exception("Match creation error for %s match %s vs %s", sport, team_a_ids, team_b_ids)
            raise MatchPersistenceError(f"Failed to create match record: {e}") from e
    except MatchError as e:
        logger.warning("Match not created: %s", e)
        return _failure(e)
    except Exception:
        logger.exception("Error creating match")
        return {"success": False, "error": "Unexpected error occurred", "error_type": "error"}

    players = {p.id: p for p in team_a.players + team_b.players}
    rating_results = await asyncio.gather(
        *(_apply_rating_update(u, players[u.player_id], sport, database) for u in elo_updates)
    )
    warnings = [w for w in rating_results if w]

    participant_records = [
        {
            "match_id": match["id"],
            "user_id": u.player_id,
            "team": (TeamSide.TEAM_A if u.player_id in team_a_ids else TeamSide.TEAM_B).value,
            "elo_before": u.elo_before,
            "elo_after": u.elo_after,
            "elo_change": u.elo_change,
        }
        for u in elo_updates
    ]
    try:
        await database.add_match_participants(participant_records)
    except Exception as e:
        # not critical, the match and ratings are already recorded
        logger.exception("Failed to create match participant records for match %s", match["id"])
        warnings.append(f"Failed to create match participant records: {e}")

    logger.info(
        "Settled %s match %s (%s), %d rating updates, %d warnings",
        sport, match["id"], result.value, len(elo_updates), len(warnings),
    )
    return {
        "success": True,
        "match": match,
        "elo_updates": [u.model_dump() for u in elo_updates],
        "warnings": warnings,
    }


async def preview_elo_changes(
    team_a_player_ids: list[RecordId],
    team_b_player_ids: list[RecordId],
    sport: str,
    result: MatchResult | str,
    database: DatabaseService | None = None,
) -> dict[str, Any]:
    """Show what a result would do to everyone's rating, without writing anything."""
    if database is None:
        database = DatabaseService()

    sport = sport_key(sport)
    team_a_ids = [str(pid) for pid in team_a_player_ids]
    team_b_ids = [str(pid) for pid in team_b_player_ids]

    try:
        result = _parse_result(result)
        validate_rosters(team_a_ids, team_b_ids)
        team_a, team_b = await _resolve_teams(team_a_ids, team_b_ids, database)
    except MatchError as e:
        return _failure(e)
    except Exception:
        logger.exception("Error previewing Elo changes")
        return {"success": False, "error": "Unexpected error occurred", "error_type": "error"}

    prediction = EloCalculator.predict_match_outcome(team_a, team_b, sport)
    elo_updates = EloCalculator.simulate_elo_change(team_a, team_b, sport, result)

    return {
        "success": True,
        "elo_updates": [u.model_dump() for u in elo_updates],
        "prediction": prediction.model_dump(),
    }


def _empty_stats(current_elo: int = DEFAULT_ELO) -> dict[str, Any]:
    return {
        "total_matches": 0,
        "wins": 0,
        "losses": 0,
        "draws": 0,
        "win_rate": 0,
        "average_elo_change": 0,
        "current_elo": current_elo,
    }


def summarize_match_history(history: list[dict[str, Any]]) -> dict[str, Any]:
    """Roll participant records (joined with their match) up into win/loss/draw counts."""
    total_matches = len(history)
    if total_matches == 0:
        stats = _empty_stats()
        del stats["current_elo"]
        return stats

    wins = 0
    draws = 0
    for record in history:
        winner = (record.get("matches") or {}).get("winner")
        if winner == MatchResult.DRAW.value:
            draws += 1
        elif winner == record["team"]:
            wins += 1

    return {
        "total_matches": total_matches,
        "wins": wins,
        "losses": total_matches - wins - draws,
        "draws": draws,
        "win_rate": wins / total_matches,
        "average_elo_change": sum(r["elo_change"] for r in history) / total_matches,
    }


async def get_player_match_stats(
    player_id: RecordId,
    sport: str | None = None,
    database: DatabaseService | None = None,
) -> dict[str, Any]:
    """Match statistics of a player, overall or for one sport.

    Never raises: a missing profile or a failed query gives zeroed stats.
    """
    if database is None:
        database = DatabaseService()

    sport = sport_key(sport) if sport else None
    try:
        profile = await database.get_profile(str(player_id))
        if not profile:
            logger.warning("Profile %s not found, returning empty match stats", player_id)
            return _empty_stats()
        history = await database.get_user_match_history(str(player_id), sport)
    except Exception:
        logger.exception("Error getting player match stats for %s", player_id)
        return _empty_stats()

    current_elo = _profile_to_player(profile).rating_for(sport) if sport else DEFAULT_ELO
    return {**summarize_match_history(history), "current_elo": current_elo}


async def get_player_match_history(
    player_id: RecordId,
    sport: str | None = None,
    database: DatabaseService | None = None,
) -> list[dict[str, Any]]:
    """Get a player's participant records, newest first."""
    if database is None:
        database = DatabaseService()

    return await database.get_user_match_history(str(player_id), sport_key(sport) if sport else None)


async def get_match(match_id: RecordId, database: DatabaseService | None = None) -> dict[str, Any] | None:
    """Get a settled match with its participant records, or None if there is no such match."""
    if database is None:
        database = DatabaseService()

    return await database.get_match(str(match_id))


async def get_recent_matches(
    sport: str | None = None,
    limit: int = 20,
    database: DatabaseService | None = None,
) -> list[dict[str, Any]]:
    """Get the latest matches, optionally for a single sport."""
    if database is None:
        database = DatabaseService()

    return await database.get_matches(sport_key(sport) if sport else None, limit)


async def get_leaderboard(
    sport: str | None = None,
    limit: int = 50,
    database: DatabaseService | None = None,
) -> list[dict[str, Any]]:
    """Get ranked players, by one sport's rating or their best rating overall."""
    if database is None:
        database = DatabaseService()

    try:
        return await database.get_leaderboard(sport_key(sport) if sport else None, limit)
    except Exception:
        logger.exception("Error fetching leaderboard for sport %s", sport)
        return []
