"""Error taxonomy mapped onto HTTP status codes at the request boundary."""

from __future__ import annotations


class RewriterError(Exception):
    """Base error; ``status_code`` is the HTTP status the handler responds with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(RewriterError):
    status_code = 400


class MethodError(RewriterError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class FetchExhaustedError(RewriterError):
    """Every proxy failed or returned unusable content."""

    status_code = 400

    def __init__(self, message: str = "Failed to fetch content from URL"):
        super().__init__(message)


class ConfigurationError(RewriterError):
    status_code = 500


class UpstreamAPIError(RewriterError):
    """The generation backend returned an error status or a malformed body."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.upstream_status = status_code
