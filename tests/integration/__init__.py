"""
Integration tests for Courtside.

These tests drive complete flows through the service layer: previewing and
settling a series of matches, then reading statistics, history and the
leaderboard back, checking that every view agrees with the stored ratings.

Test files:
- test_main.py: application wiring and health endpoints
- test_happy_path.py: a club evening of matches from preview to leaderboard
"""

# Mark this package for pytest discovery
__all__ = []
