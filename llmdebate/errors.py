"""Error kinds surfaced by the debate core. The CLI maps all of them to exit 1."""


class DebateError(Exception):
    """Base class for every failure that aborts a debate run."""


class ConfigurationError(DebateError):
    """Conflicting or missing options, detected before any generation call."""


class InputUnavailable(DebateError):
    """The seed claim could not be read."""


class EstimationFailure(DebateError):
    """The wall-clock budget could not be parsed."""


class GenerationFailure(DebateError):
    """A generation call errored or returned empty text."""

    def __init__(self, role: str, message: str) -> None:
        self.role = role
        super().__init__(f"{role}: {message}")
