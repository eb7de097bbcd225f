"""
Game State Machine - session lifecycle states and end outcomes
"""

from enum import Enum, auto


class SessionState(Enum):
    """Session lifecycle states"""
    IDLE = auto()
    COUNTDOWN = auto()
    RUNNING = auto()
    CELEBRATION = auto()
    EXPLOSION = auto()
    ENDED = auto()


class Outcome(Enum):
    """Why a session ended"""
    WIN = 'win'
    TIME_UP = 'time_up'
    EXPLODED = 'exploded'
    QUIT = 'quit'


# Allowed transitions; anything else is a programming error
TRANSITIONS = {
    SessionState.IDLE: {SessionState.COUNTDOWN},
    SessionState.COUNTDOWN: {SessionState.RUNNING, SessionState.IDLE},
    SessionState.RUNNING: {SessionState.CELEBRATION, SessionState.EXPLOSION, SessionState.ENDED},
    SessionState.CELEBRATION: {SessionState.ENDED},
    SessionState.EXPLOSION: {SessionState.ENDED},
    SessionState.ENDED: {SessionState.IDLE, SessionState.COUNTDOWN},
}


class SessionResult:
    """
    What the player sees after a session ends
    """
    def __init__(self, outcome, score, collected, total, seaweeds_collected=0, remaining_seconds=0):
        self.outcome = outcome
        self.score = score
        self.collected = collected
        self.total = total
        self.seaweeds_collected = seaweeds_collected
        self.remaining_seconds = remaining_seconds

    @property
    def won(self):
        return self.collected >= self.total

    @property
    def ended_early(self):
        return self.outcome is Outcome.QUIT

    @property
    def title(self):
        if self.won:
            return "Congratulations!"
        if self.outcome is Outcome.TIME_UP:
            return "Time's up!"
        return "Game Over!"

    @property
    def message(self):
        if self.won:
            return "You found all the treasures!"
        return "Your final score and progress:"

    def __repr__(self):
        return f"SessionResult({self.outcome.value}, score={self.score}, {self.collected}/{self.total})"


class GameStateManager:
    """
    Tracks the current session state and validates transitions
    """
    def __init__(self):
        self.current_state = SessionState.IDLE
        self.previous_state = None

    def transition_to(self, new_state):
        """
        Move to a new state

        Args:
            new_state: SessionState

        Raises:
            ValueError: if the transition is not allowed
        """
        if new_state not in TRANSITIONS[self.current_state]:
            raise ValueError(f"illegal transition {self.current_state.name} -> {new_state.name}")
        self.previous_state = self.current_state
        self.current_state = new_state

    def is_state(self, *states):
        """Check if current state is one of the given states"""
        return self.current_state in states

    def get_state_name(self):
        return self.current_state.name

    def reset(self):
        self.current_state = SessionState.IDLE
        self.previous_state = None

    def __repr__(self):
        return f"GameStateManager(state={self.current_state.name})"
