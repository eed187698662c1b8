class GameError(Exception):
    """Base for recoverable game rule violations.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = 400

    def __init__(self, message=None, game_id=None):
        super().__init__(message or self.__class__.__doc__)
        self.game_id = game_id

    def to_dict(self):
        payload = {'error': str(self), 'code': self.__class__.__name__}
        if self.game_id is not None:
            payload['game_id'] = self.game_id
        return payload


class DuplicateActiveGame(GameError):
    """You already have a game in progress"""

    status_code = 409


class GameAlreadyFinished(GameError):
    """This game is already finished"""

    status_code = 409


class HelpAlreadyUsed(GameError):
    """This help has already been used in this game"""

    status_code = 409


class InvalidHelpKind(GameError):
    """Unknown help type"""

    status_code = 400


class ConcurrentModification(GameError):
    """The game was changed by another request, please reload it"""

    status_code = 409


class CatalogExhausted(GameError):
    """Not enough questions to build a game"""

    status_code = 503
