from typing import Optional, List, Dict, Any
import json
import os
from supabase import create_client, Client

class DatabaseService:
    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        """Initialize the database service with Supabase credentials."""
        # For testing and explicit parameters, use them directly
        if url and key:
            self.url = url
            self.key = key
        else:
            # Try LOCAL_ first (for local development), then fallback to remote
            self.url = url or os.getenv("LOCAL_SUPABASE_URL") or os.getenv("SUPABASE_URL")
            self.key = key or os.getenv("LOCAL_SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY")

        if not self.url or not self.key:
            raise ValueError("Supabase URL and key must be provided or set in environment variables")
        self.client: Client = create_client(self.url, self.key)

    # Profile operations
    async def get_profile(self, player_id: str) -> Optional[Dict[str, Any]]:
        """Get a player's profile, or None if it does not exist."""
        response = self.client.table("profiles").select("*").eq("id", str(player_id)).limit(1).execute()
        return response.data[0] if response.data else None

    async def get_profiles_by_ids(self, player_ids: List[str]) -> List[Dict[str, Any]]:
        """Get profiles for multiple player IDs. Missing IDs are simply absent from the result."""
        if not player_ids:
            return []

        str_ids = [str(pid) for pid in player_ids]
        response = self.client.table("profiles").select("*").in_("id", str_ids).execute()
        return response.data

    async def update_player_elo(
        self,
        player_id: str,
        elo: Dict[str, int],
        expected_elo: Dict[str, int],
    ) -> Optional[Dict[str, Any]]:
        """Overwrite a player's rating mapping if it still equals ``expected_elo``.

        The guard covers every sport, so a concurrent write to any rating of
        the player makes this update miss.

        Returns the updated profile, or None when the row did not match
        (the profile is gone or another match changed its ratings first).
        """
        response = (
            self.client.table("profiles")
            .update({"elo": elo})
            .eq("id", str(player_id))
            .eq("elo", json.dumps(expected_elo))
            .execute()
        )
        return response.data[0] if response.data else None

    # Match operations
    async def create_match(self, match_data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a match record. ``created_at`` is assigned by the database."""
        response = self.client.table("matches").insert(match_data).execute()
        return response.data[0]

    async def get_match(self, match_id: str) -> Optional[Dict[str, Any]]:
        """Get a match by ID with its participants, or None if it does not exist."""
        match_response = self.client.table("matches").select("*").eq("id", str(match_id)).limit(1).execute()
        if not match_response.data:
            return None
        participants_response = self.client.table("match_participants").select("*").eq("match_id", str(match_id)).execute()

        match = match_response.data[0]
        match["participants"] = participants_response.data
        return match

    async def get_matches(self, sport: Optional[str] = None, limit: int = 20) -> List[Dict[str, Any]]:
        """Get the most recent matches, optionally for one sport."""
        query = self.client.table("matches").select("*")
        if sport:
            query = query.eq("sport", sport)
        response = query.order("created_at", desc=True).limit(limit).execute()
        return response.data

    # Match participant operations
    async def add_match_participants(self, participants: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert participant records for a match in one batch."""
        response = self.client.table("match_participants").insert(participants).execute()
        return response.data

    async def get_user_match_history(self, user_id: str, sport: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get a player's participant records joined with the match they belong to."""
        query = (
            self.client.table("match_participants")
            .select("*, matches!inner(sport, winner, score, court_id, created_at)")
            .eq("user_id", str(user_id))
        )
        if sport:
            query = query.eq("matches.sport", sport)
        response = query.order("created_at", desc=True).execute()
        return response.data

    # Leaderboard
    async def get_leaderboard(self, sport: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        """Get ranked players through the get_leaderboard database function."""
        response = self.client.rpc(
            "get_leaderboard", {"sport_name": sport, "limit_count": limit}
        ).execute()
        return response.data
