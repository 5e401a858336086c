"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.core.config import get_settings
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status
from src.wordgame.placement import (
    Placement,
    flatten_placements,
    parse_placements,
    split_placements,
)


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    board_width: int = Field(default_factory=lambda: get_settings().DEFAULT_BOARD_WIDTH)
    max_players: int = Field(default_factory=lambda: get_settings().DEFAULT_MAX_PLAYERS)

    @field_validator("board_width")
    @classmethod
    def validate_board_width(cls, value: int) -> int:
        maximum = get_settings().MAX_BOARD_WIDTH
        if not 1 <= value <= maximum:
            raise InvalidRequestError(
                f"Board width must be between 1 and {maximum}, got {value}."
            )
        return value

    @field_validator("max_players")
    @classmethod
    def validate_max_players(cls, value: int) -> int:
        maximum = get_settings().MAX_PLAYERS_LIMIT
        if not 1 <= value <= maximum:
            raise InvalidRequestError(
                f"Number of players must be between 1 and {maximum}, got {value}."
            )
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID
    player_id: Optional[UUID] = None


class GetPlayerRequest(BaseModel):
    game_id: UUID
    player_id: UUID


class MoveRequest(BaseModel):
    """
    Placements travel as a flat list: position, letter, position, letter, ...
    The comma-delimited string form ("112,C,113,A") is accepted as well.
    """

    game_id: UUID
    player_id: UUID
    seq: int
    placements: list[str]

    @field_validator("seq")
    @classmethod
    def validate_seq(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Move sequence number cannot be negative: {value}")
        return value

    @field_validator("placements", mode="before")
    @classmethod
    def validate_placements(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            tokens = split_placements(value)
        elif isinstance(value, (list, tuple)):
            tokens = [str(token) for token in value]
        else:
            raise InvalidRequestError(
                f"Cannot interpret placements of type {type(value).__name__}."
            )
        # normalized: odd trailing token dropped, letters upper case
        return flatten_placements(parse_placements(tokens))

    def to_placements(self) -> list[Placement]:
        return parse_placements(self.placements)


class GetMoveRequest(BaseModel):
    game_id: UUID
    seq: int


class ListMovesRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class CreateGameResponse(BaseModel):
    game_id: UUID
    width: int
    max_players: int
    status: Status


class JoinGameResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    order: int
    rack: list[str]


class GameResponse(BaseModel):
    game_id: UUID
    width: int
    max_players: int
    board: list[str]
    status: Status
    next_move_seq: int
    next_player_order: int


class PlayerResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    order: int
    rack: list[str]
    score: int


class MoveResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    rack: list[str]
    score: int
    status: Status
    next_move_seq: int
    next_player_order: int
    move_score: int
    words: list[str]


class MoveRecordResponse(BaseModel):
    game_id: UUID
    seq: int
    player_id: UUID
    placements: list[str]
    score: int
    words: list[str]


class MoveHistoryResponse(BaseModel):
    game_id: UUID
    moves: list[MoveRecordResponse]
