"""Errors raised by the game engine and the question bank loader."""


class GameError(Exception):
    """Base error for failures reported back to the caller of an action."""

    message = 'Game error'

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class InvalidRoomCode(GameError):
    message = 'Room code must be a 6-digit number'


class RoomFull(GameError):
    message = 'Room is full'


class QuestionBankError(GameError):
    message = 'Question bank must contain a non-empty list of questions'


class AlreadyJoined(GameError):
    message = 'You have already joined another room'
