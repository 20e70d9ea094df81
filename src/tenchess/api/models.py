"""Requests and Response models"""

import re
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from tenchess.chess.square import BOARD_SIZE
from tenchess.core.exceptions import InvalidRequestError
from tenchess.core.shared_types import Color, Status

SQUARE_PATTERN = re.compile(r"^[A-Za-z]\d{1,2}$")


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    clock_minutes: Optional[int] = None
    starting_board: Optional[str] = None
    active_color: Color = Color.WHITE

    @field_validator("clock_minutes")
    @classmethod
    def validate_clock_minutes(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise InvalidRequestError(f"Clock needs a positive number of minutes, got {value}")
        return value

    @field_validator("starting_board")
    @classmethod
    def validate_starting_board(cls, value: Optional[str]) -> Optional[str]:
        """Only the structure is checked here. The Board will complain about the content."""
        if value is None:
            return value

        ranks = value.strip().split("/")
        if len(ranks) != BOARD_SIZE:
            raise InvalidRequestError(
                f"Board layout must contain {BOARD_SIZE} slash-separated ranks."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not SQUARE_PATTERN.match(value.strip()):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.strip()


class GameActionRequest(BaseModel):
    """Draw offers, accepting/declining them and resigning. Without a color, the side to move is acting."""

    game_id: UUID
    color: Optional[Color] = None


class EnableClockRequest(BaseModel):
    game_id: UUID
    minutes: int

    @field_validator("minutes")
    @classmethod
    def validate_minutes(cls, value: int) -> int:
        if value <= 0:
            raise InvalidRequestError(f"Clock needs a positive number of minutes, got {value}")
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: str
    active_color: Color
    status: Status
    winner: Optional[Color]
    draw_offered_by: Optional[Color]
    remaining_seconds: Optional[dict[Color, float]] = None


class ActionResponse(BaseModel):
    success: bool
    message: str
    check: bool
    game: GameResponse
