"""
Session Manager - Creates and manages game sessions.

A session is one play-through: the canonical GameState, the reducer that
advances it, and one DecisionAgent per seat.

PERSISTENCE RULES:
- Sessions are in-memory only
- The shared game-state store is an external collaborator; callers
  persist GameState.to_dict() snapshots themselves
- Ending a session simply drops it
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import random
import time
import uuid

from ..bots import BotAdapter, DecisionAgent, HumanAdapter
from ..card_effects.catalog import CardCatalog
from ..config import DEFAULT_CONFIG, EngineConfig
from ..engine_core.board import DEFAULT_BOARD, Board
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState
from ..games.shitz_creek import default_catalog, new_game
from ..logging_config import get_logger

logger = get_logger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Someone won
    ABANDONED = "abandoned"  # Ended before a winner


@dataclass
class Session:
    """
    An in-memory game session.

    step_in_flight is the caller-level reentrancy guard: the game loop
    sets it while a turn step is resolving.
    """
    session_id: str
    created_at: float
    game_state: GameState
    reducer: Reducer
    agents: dict[str, DecisionAgent] = field(default_factory=dict)

    state: SessionState = SessionState.ACTIVE
    seed: int | None = None
    last_activity: float = 0.0
    step_in_flight: bool = False

    # Every message the reducer produced, in order
    message_log: list[str] = field(default_factory=list)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state == SessionState.ACTIVE

    def current_agent(self) -> DecisionAgent | None:
        return self.agents.get(self.game_state.current_player.player_id)

    def is_bot_turn(self) -> bool:
        """Check if the seat to act is a bot."""
        if self.game_state.is_finished:
            return False
        return self.game_state.current_player.is_bot

    def human_agent(self, player_id: str) -> HumanAdapter | None:
        agent = self.agents.get(player_id)
        return agent if isinstance(agent, HumanAdapter) else None

    def touch(self) -> None:
        self.last_activity = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Seat players and build the opening state
    - Track active sessions
    - Drop ended and stale sessions
    """

    def __init__(self, board: Board = DEFAULT_BOARD, config: EngineConfig = DEFAULT_CONFIG):
        self.board = board
        self.config = config
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        human_names: list[str],
        num_bots: int = 1,
        seed: int | None = None,
        catalog: CardCatalog | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            human_names: Display names of human players, in seating order
            num_bots: Number of bot players
            seed: Seed for the deck, space effects and bot dice
            catalog: Card source (built-in deck if not provided)

        Returns:
            New Session with the first player to roll
        """
        session_id = str(uuid.uuid4())
        rng = random.Random(seed)
        cards = catalog or default_catalog()

        game_state = new_game(
            human_names,
            num_bots=num_bots,
            catalog=cards,
            rng=rng,
            config=self.config,
            game_id=session_id,
        )

        agents: dict[str, DecisionAgent] = {}
        for player in game_state.players:
            agent_rng = random.Random(rng.getrandbits(32))
            if player.is_bot:
                agents[player.player_id] = BotAdapter(rng=agent_rng, dice_sides=self.config.dice_sides)
            else:
                agents[player.player_id] = HumanAdapter(rng=agent_rng, dice_sides=self.config.dice_sides)

        now = time.time()
        session = Session(
            session_id=session_id,
            created_at=now,
            game_state=game_state,
            reducer=Reducer(board=self.board, catalog=cards, rng=rng, config=self.config),
            agents=agents,
            seed=seed,
            last_activity=now,
        )
        session.message_log.append(game_state.last_message)

        self._sessions[session_id] = session
        logger.info(
            "session %s created: %d human(s), %d bot(s), seed=%s",
            session_id, len(human_names), num_bots, seed,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.game_state.is_finished:
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED
        logger.info("session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop sessions with no activity for max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
