"""
Shared test utilities and helpers for the Courtside test suite.

``FakeDatabaseService`` keeps profiles, matches and participant records in
memory and answers the same calls as the Supabase-backed ``DatabaseService``,
so the suite runs without a database. Any operation can be made to fail via
``fail_on``.
"""

import itertools
import logging
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from app.models import Sport
from app.services.database import DatabaseService

logger = logging.getLogger(__name__)

DEFAULT_ELO_RATINGS = {sport.value: 1500 for sport in Sport}

BASE_TIME = datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)


class SimulatedDatabaseError(Exception):
    """Raised by the fake database for operations listed in ``fail_on``."""


class FakeDatabaseService(DatabaseService):
    def __init__(self):
        # No Supabase client: everything lives in the dicts below
        self.profiles: Dict[str, Dict[str, Any]] = {}
        self.matches: List[Dict[str, Any]] = []
        self.participants: List[Dict[str, Any]] = []
        self.fail_on: set[str] = set()
        self.writes: List[str] = []
        self._clock = itertools.count()

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise SimulatedDatabaseError(f"simulated {operation} failure")

    def _now(self) -> str:
        return (BASE_TIME + timedelta(minutes=next(self._clock))).isoformat()

    def add_profile(self, name: str, elo: Optional[Dict[str, int]] = None, player_id: Optional[str] = None) -> Dict[str, Any]:
        """Seed a profile; ratings default to 1500 in every sport."""
        player_id = player_id or str(uuid4())
        ratings = dict(DEFAULT_ELO_RATINGS)
        ratings.update(elo or {})
        self.profiles[player_id] = {"id": player_id, "name": name, "avatar": None, "elo": ratings}
        return self.profiles[player_id]

    async def get_profile(self, player_id: str) -> Optional[Dict[str, Any]]:
        self._check("get_profile")
        profile = self.profiles.get(str(player_id))
        return deepcopy(profile) if profile else None

    async def get_profiles_by_ids(self, player_ids: List[str]) -> List[Dict[str, Any]]:
        self._check("get_profiles_by_ids")
        return [deepcopy(self.profiles[str(pid)]) for pid in player_ids if str(pid) in self.profiles]

    async def update_player_elo(self, player_id, elo, expected_elo):
        self._check("update_player_elo")
        profile = self.profiles.get(str(player_id))
        # compare-and-swap on the whole rating mapping, like the jsonb equality filter
        if profile is None or profile["elo"] != expected_elo:
            return None
        self.writes.append("update_player_elo")
        profile["elo"] = dict(elo)
        return deepcopy(profile)

    async def create_match(self, match_data: Dict[str, Any]) -> Dict[str, Any]:
        self._check("create_match")
        self.writes.append("create_match")
        match = {"id": str(uuid4()), "created_at": self._now(), **match_data}
        self.matches.append(match)
        return deepcopy(match)

    async def get_match(self, match_id: str) -> Optional[Dict[str, Any]]:
        self._check("get_match")
        match = next((m for m in self.matches if m["id"] == str(match_id)), None)
        if match is None:
            return None
        result = deepcopy(match)
        result["participants"] = [deepcopy(p) for p in self.participants if p["match_id"] == match["id"]]
        return result

    async def get_matches(self, sport: Optional[str] = None, limit: int = 20) -> List[Dict[str, Any]]:
        self._check("get_matches")
        matches = [m for m in self.matches if sport is None or m["sport"] == sport]
        return deepcopy(list(reversed(matches))[:limit])

    async def add_match_participants(self, participants: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        self._check("add_match_participants")
        self.writes.append("add_match_participants")
        created_at = self._now()
        rows = [{"id": str(uuid4()), "created_at": created_at, **p} for p in participants]
        self.participants.extend(rows)
        return deepcopy(rows)

    async def get_user_match_history(self, user_id: str, sport: Optional[str] = None) -> List[Dict[str, Any]]:
        self._check("get_user_match_history")
        matches = {m["id"]: m for m in self.matches}
        history = []
        for participant in self.participants:
            if participant["user_id"] != str(user_id):
                continue
            match = matches[participant["match_id"]]
            if sport and match["sport"] != sport:
                continue
            row = deepcopy(participant)
            row["matches"] = {
                key: match[key] for key in ("sport", "winner", "score", "court_id", "created_at")
            }
            history.append(row)
        return list(reversed(history))

    async def get_leaderboard(self, sport: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        self._check("get_leaderboard")
        entries = []
        for profile in self.profiles.values():
            elo = profile["elo"].get(sport, 1500) if sport else max(profile["elo"].values())
            matches_played = sum(
                1
                for p in self.participants
                if p["user_id"] == profile["id"]
                and (sport is None or next(m for m in self.matches if m["id"] == p["match_id"])["sport"] == sport)
            )
            entries.append({
                "user_id": profile["id"],
                "name": profile["name"],
                "avatar": profile["avatar"],
                "elo": elo,
                "matches_played": matches_played,
            })
        entries.sort(key=lambda e: e["elo"], reverse=True)
        return [{**entry, "rank": rank} for rank, entry in enumerate(entries[:limit], start=1)]


def create_test_profiles(db_service: FakeDatabaseService, count: int, prefix: str = "Player", elo: Optional[Dict[str, int]] = None) -> List[str]:
    """
    Create ``count`` profiles with the same starting ratings.

    Returns:
        The new player ids, in creation order
    """
    ids = []
    for i in range(count):
        profile = db_service.add_profile(f"{prefix} {i + 1}", elo)
        ids.append(profile["id"])
    logger.debug("Created %d test profiles", count)
    return ids


def elo_of(db_service: FakeDatabaseService, player_id: str, sport: str) -> int:
    """Current stored rating of a player in a sport."""
    return db_service.profiles[str(player_id)]["elo"][sport]


def assert_no_writes(db_service: FakeDatabaseService) -> None:
    assert db_service.writes == [], f"Expected no writes, got {db_service.writes}"
    assert db_service.matches == []
    assert db_service.participants == []
