"""
Errors raised while settling or previewing a match.

They never leave ``app.core.matches``: the service turns them into
``{"success": False, "error": ...}`` results.
"""


class MatchError(Exception):
    """Base class for match settlement failures."""

    kind = "error"


class MatchValidationError(MatchError):
    """The match as submitted cannot be settled."""

    kind = "validation"


class RosterValidationError(MatchValidationError):
    """A roster is empty or lists a player twice."""


class PlayerResolutionError(RosterValidationError):
    """One or more player ids did not resolve to a profile."""

    def __init__(self, missing_ids: list[str]):
        self.missing_ids = missing_ids
        super().__init__("Could not fetch all player profiles")


class MatchPersistenceError(MatchError):
    """The match record could not be written."""

    kind = "persistence"
