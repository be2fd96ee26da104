from __future__ import annotations


class LLMCliError(Exception):
    """Base class for every condition that ends a run."""


class ConfigError(LLMCliError):
    pass


class ArgumentError(LLMCliError):
    pass


class InvalidArgument(ArgumentError):
    pass


class MissingPromptMarker(ArgumentError):
    def __init__(self, marker: str = "$"):
        super().__init__(f"Missing '{marker}' command")
        self.marker = marker


class SerializationError(LLMCliError):
    pass


class RequestFailed(LLMCliError):
    """
    The round-trip to a provider did not produce a usable response.
    status_code/body are set when the server answered with a failure status.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        text = super().__str__()
        if self.status_code is None:
            return text
        return f"{text}\nStatus Code: {self.status_code}\nError Message: {self.body or ''}"


class TransportError(RequestFailed):
    pass


class ResponseError(LLMCliError):
    pass


class ResponseStatusError(RequestFailed, ResponseError):
    pass


class MalformedResponse(ResponseError):
    pass


class RunAborted(Exception):
    """Raised to a writer that reaches the console gate after a fatal failure."""
