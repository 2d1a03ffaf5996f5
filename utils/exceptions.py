"""Game exceptions carrying a player-facing message."""


class DefenceguessrError(Exception):
    """Base exception for game errors."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class MissingLocationError(DefenceguessrError):
    """Raised when a guess is submitted before a map location was chosen."""

    def __init__(self):
        super().__init__(
            "Location guess submitted without a location",
            "Select a location on the map first!",
        )


class RoundStateError(DefenceguessrError):
    """Raised when a round or session operation is called out of order."""

    def __init__(self, action: str, phase: str):
        super().__init__(
            f"Cannot {action} while round is {phase}",
            f"You can't {action} right now.",
        )
        self.action = action
        self.phase = phase


class CatalogUnavailableError(DefenceguessrError):
    """Raised when the equipment catalog can't be loaded."""

    def __init__(self, details: str):
        super().__init__(
            f"Equipment catalog unavailable: {details}",
            "Equipment data is unavailable. Please try again later.",
        )


class DailyChallengeError(DefenceguessrError):
    """Raised when a daily challenge can't be started."""


class BoundaryDataUnavailableError(DefenceguessrError):
    """Raised when the country boundary data can't be loaded."""

    def __init__(self, details: str):
        super().__init__(
            f"Country boundary data unavailable: {details}",
            "Map data is unavailable. Please try again later.",
        )
