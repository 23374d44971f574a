from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class PlayerStatsResponse(BaseModel):
    total_matches: int
    wins: int
    losses: int
    draws: int
    win_rate: float
    average_elo_change: float
    current_elo: int


class LeaderboardEntryResponse(BaseModel):
    user_id: UUID
    name: str
    avatar: Optional[str] = None
    elo: int
    matches_played: int
    rank: int
