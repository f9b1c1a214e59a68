from fastapi import status


class GameError(Exception):
    """Base class for recoverable game errors surfaced to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InsufficientFundsError(GameError):
    """No draw occurred: nothing was charged and no cards were produced."""

    status_code = status.HTTP_402_PAYMENT_REQUIRED

    def __init__(self, *, required: int, available: int) -> None:
        super().__init__(f"Insufficient currency. Required: {required}, available: {available}")
        self.required = required
        self.available = available


class InvalidRoundIndexError(GameError):
    def __init__(self, *, index: int, hand_size: int) -> None:
        super().__init__(f"Card index {index} is out of range for a hand of {hand_size}")
        self.index = index
        self.hand_size = hand_size


class InvalidHandError(GameError):
    pass


class MatchNotInProgressError(GameError):
    status_code = status.HTTP_409_CONFLICT


class PlayerNotFoundError(GameError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, username: str) -> None:
        super().__init__(f"Player {username!r} not found")
        self.username = username
