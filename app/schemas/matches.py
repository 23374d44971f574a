from datetime import datetime
from typing import List, Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models import MatchResult, Sport, TeamSide


class CreateMatchRequest(BaseModel):
    sport: Sport
    team_a_players: List[UUID] = Field(..., min_length=1)
    team_b_players: List[UUID] = Field(..., min_length=1)
    result: Optional[MatchResult] = Field(
        None, description="Declared winner; detected from score_a/score_b when omitted"
    )
    score_a: Optional[str] = None
    score_b: Optional[str] = None
    court_id: Optional[UUID] = None
    score: Optional[Any] = None

    @model_validator(mode="after")
    def check_result_or_scores(self):
        if self.result is None and (self.score_a is None or self.score_b is None):
            raise ValueError("Either result or both score_a and score_b must be given")
        return self


class PreviewRequest(BaseModel):
    sport: Sport
    team_a_players: List[UUID] = Field(..., min_length=1)
    team_b_players: List[UUID] = Field(..., min_length=1)
    result: MatchResult


class EloUpdateResponse(BaseModel):
    player_id: UUID
    elo_before: int
    elo_after: int
    elo_change: int


class MatchPredictionResponse(BaseModel):
    team_a_win_probability: float
    team_b_win_probability: float
    elo_advantage: float


class MatchResponse(BaseModel):
    id: UUID
    sport: Sport
    team_a_players: List[UUID]
    team_b_players: List[UUID]
    winner: MatchResult
    score: Optional[Any] = None
    court_id: Optional[UUID] = None
    created_at: Optional[datetime] = None


class MatchParticipantResponse(BaseModel):
    match_id: UUID
    user_id: UUID
    team: TeamSide
    elo_before: int
    elo_after: int
    elo_change: int


class MatchDetailResponse(MatchResponse):
    participants: List[MatchParticipantResponse] = []


class MatchSettlementResponse(BaseModel):
    match: MatchResponse
    elo_updates: List[EloUpdateResponse]
    warnings: List[str] = []


class PreviewResponse(BaseModel):
    elo_updates: List[EloUpdateResponse]
    prediction: MatchPredictionResponse
