"""
Game exceptions
"""


class TreasureHuntError(Exception):
    """Base class for all game errors"""


class CountdownAborted(TreasureHuntError):
    """A pre-game countdown tick failed; the session goes back to idle"""


class ReportingError(TreasureHuntError):
    """The session-tracking backend could not be reached or answered badly"""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status
