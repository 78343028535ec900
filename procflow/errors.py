"""Error hierarchy for procflow."""

from typing import Any, Mapping


class ProcflowError(Exception):
    """Base exception for procflow failures."""

    def __init__(
        self,
        message: str,
        *,
        user_message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = message if user_message is None else user_message
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class FlowParseError(ProcflowError):
    """Imported text is not a valid flow document."""


class CollaboratorError(ProcflowError):
    """An AI collaborator failed or returned an unusable response."""


class ConfigurationError(ProcflowError):
    """Required configuration (e.g. an API key) is missing."""
