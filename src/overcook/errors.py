"""
Error taxonomy.

Every error here is recoverable by repeating the user action. The web layer
maps each class to an HTTP status; domain code raises them at the call site.
"""


class OvercookError(Exception):
    """Base class for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(OvercookError):
    """User input rejected locally (empty ingredient, inverted range, ...)."""

    status_code = 422


class AuthenticationRequired(OvercookError):
    """A persistence or ledger operation was attempted without a signed-in user."""

    status_code = 401

    def __init__(self, message: str = "Please sign in to continue"):
        super().__init__(message)


class ExternalServiceError(OvercookError):
    """An external collaborator failed, was rate limited, or returned garbage."""

    status_code = 502


class GenerationError(ExternalServiceError):
    """Recipe generation failed. Any existing batch is left untouched."""


class ChatError(ExternalServiceError):
    """Recipe chat call failed."""


class LedgerError(ExternalServiceError):
    """Saved/cooked recipe ledger write or read failed."""


class RecipeNotFound(OvercookError):
    """No recipe with the requested id in the current session."""

    status_code = 404

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


class GenerationInProgress(OvercookError):
    """A generation request for this session is already running."""

    status_code = 409

    def __init__(self, message: str = "Recipes are already being generated"):
        super().__init__(message)
