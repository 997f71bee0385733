"""Exception hierarchy and user-facing messages for IMDb ratings lookup."""


class RatingsError(Exception):
    """Base exception for all lookup errors."""

    user_message = "Search failed."


class ConfigError(RatingsError):
    """Invalid or missing configuration."""


class ValidationError(RatingsError):
    """The search query was empty."""

    user_message = "Please enter a movie title."


class NoMatchError(RatingsError):
    """No candidate matched the query."""

    user_message = "No matching movie found."


class MissingIdError(RatingsError):
    """The best candidate had no usable IMDb id."""

    user_message = "No IMDb ID found."


class CollaboratorError(RatingsError):
    """An external collaborator (API or store) failed."""

    user_message = "Search failed."


class TransportError(CollaboratorError):
    """The metadata API returned a non-success status or an unparseable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StoreError(CollaboratorError):
    """The movie cache backend failed."""


def user_message(error: Exception) -> str:
    """Map any exception to the short message shown to the user.

    Anything outside the taxonomy is reported as a generic search failure.
    """
    if isinstance(error, RatingsError):
        return error.user_message
    return CollaboratorError.user_message
