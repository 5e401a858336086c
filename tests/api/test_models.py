from uuid import UUID, uuid4

import pytest

from src.api.models import CreateGameRequest, MoveRequest
from src.core.exceptions import InvalidRequestError
from src.wordgame.placement import Placement


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_create_game_defaults() -> None:
    """Without arguments: the standard 15x15 board for two players."""
    request = CreateGameRequest()
    assert request.board_width == 15
    assert request.max_players == 2


@pytest.mark.parametrize("width", [0, -3, 26])
def test_invalid_board_width(width: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(board_width=width, max_players=2)


@pytest.mark.parametrize("max_players", [0, 9])
def test_invalid_number_of_players(max_players: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(board_width=15, max_players=max_players)


# -- Validation - MoveRequest --
def test_placements_as_list(mock_id: UUID) -> None:
    request = MoveRequest(
        game_id=mock_id, player_id=mock_id, seq=0, placements=["112", "C", "113", "A"]
    )
    assert request.placements == ["112", "C", "113", "A"]
    assert request.to_placements() == [Placement(112, "C"), Placement(113, "A")]


def test_placements_as_delimited_string(mock_id: UUID) -> None:
    """The comma-delimited wire format, with a lower case letter and an odd trailing token."""
    request = MoveRequest(game_id=mock_id, player_id=mock_id, seq=3, placements="112,c,113")
    assert request.placements == ["112", "C"]


def test_placements_with_numbers(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, player_id=mock_id, seq=0, placements=[112, "C"])
    assert request.to_placements() == [Placement(112, "C")]


def test_no_placements(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, player_id=mock_id, seq=0, placements="")
    assert request.to_placements() == []


@pytest.mark.parametrize(
    "placements",
    [
        "a,C",  # position is not a number
        "112,CA",  # more than one letter
        ["112", "1"],  # not a letter
        "112,ß",  # upper case is "SS"
    ],
)
def test_invalid_placements(mock_id: UUID, placements: str | list[str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, player_id=mock_id, seq=0, placements=placements)


def test_placements_of_wrong_type(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, player_id=mock_id, seq=0, placements=112)


def test_negative_sequence_number(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, player_id=mock_id, seq=-1, placements="112,C")
