"""
Tests for API Pydantic schemas.

Validates that:
- Request models apply defaults and bounds
- Error codes serialize as plain strings
- Game state responses carry the pending choice
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_create_session_defaults(self):
        from creek.api.schemas import CreateSessionRequest

        request = CreateSessionRequest()

        assert request.human_names == ["Player"]
        assert request.num_bots == 1
        assert request.random_seed is None
        assert request.cards is None

    def test_create_session_bot_bounds(self):
        """num_bots must be in 0-5."""
        from creek.api.schemas import CreateSessionRequest

        with pytest.raises(ValidationError):
            CreateSessionRequest(num_bots=6)
        with pytest.raises(ValidationError):
            CreateSessionRequest(num_bots=-1)

    def test_run_bots_bounds(self):
        from creek.api.schemas import RunBotsRequest

        assert RunBotsRequest().max_steps == 500
        with pytest.raises(ValidationError):
            RunBotsRequest(max_steps=0)

    def test_roll_request_value_optional(self):
        from creek.api.schemas import RollRequest

        assert RollRequest(player_id="player_1").value is None
        with pytest.raises(ValidationError):
            RollRequest()

    def test_error_response_schema(self):
        """ErrorResponse dumps the code as a plain string."""
        from creek.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="Not player_2's turn",
            error_code=ErrorCode.NOT_YOUR_TURN,
            details={"current_player_id": "player_1"},
        )

        data = error.model_dump(mode="json")
        assert data["error_code"] == "NOT_YOUR_TURN"
        assert data["api_version"] == "v1"
        assert data["details"]["current_player_id"] == "player_1"

    def test_game_state_response_schema(self):
        from creek.api.schemas import (
            DeckInfo,
            GameStateResponse,
            PlayerInfo,
            SessionStatus,
            TargetPromptInfo,
        )

        response = GameStateResponse(
            session_id="session-123",
            status=SessionStatus.WAITING_TARGET,
            phase="target_pending",
            turn_number=4,
            players=[
                PlayerInfo(player_id="player_1", name="Ann", is_bot=False, is_current_turn=True, position=3),
                PlayerInfo(player_id="bot_1", name="Robo-Flush", is_bot=True, paddles=2),
            ],
            current_turn_player_id="player_1",
            deck=DeckInfo(draw_pile=49, discard_pile=1, total_cards=50),
            pending_choice=TargetPromptInfo(
                player_id="player_1",
                prompt_text="Select a player to steal a paddle from",
                candidate_targets=["bot_1"],
                card_id="sc_17",
                action_kind="paddle_steal",
            ),
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "waiting_target"
        assert data["pending_choice"]["candidate_targets"] == ["bot_1"]
        assert data["deck"]["draw_pile"] == 49
        assert data["winner"] is None

    def test_player_info_from_attributes(self):
        """PlayerInfo can be built straight from a PlayerState."""
        from creek.api.schemas import PlayerInfo
        from creek.engine_core.state import PlayerState

        player = PlayerState(player_id="player_1", name="Ann", position=7, paddles=2, skip_yellow=True)
        info = PlayerInfo.model_validate(player)

        assert info.position == 7
        assert info.skip_yellow
        assert info.is_current_turn is False
