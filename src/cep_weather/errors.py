"""
cep_weather.errors

Error taxonomy shared by both hops of the pipeline.

Responsibilities:
- Define the closed set of error kinds and their HTTP status / public message.
- Provide the single exception type that crosses client/service/API layers.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    UNPROCESSABLE_INPUT = (422, "invalid zipcode")
    NOT_FOUND = (404, "can not find zipcode")
    INTERNAL = (500, "internal server error")

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message


class PipelineError(Exception):
    """
    Raised by clients and services; translated to an ErrorEnvelope by the API layer.

    `detail` is for logs only. Callers never see it: the response body is
    always `kind.message`.
    """

    def __init__(
        self,
        kind: ErrorKind,
        detail: str = "",
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail or kind.message)
        self.kind = kind
        self.detail = detail or kind.message
        self.cause = cause

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @classmethod
    def unprocessable(cls, detail: str = "") -> PipelineError:
        return cls(ErrorKind.UNPROCESSABLE_INPUT, detail)

    @classmethod
    def not_found(cls, detail: str = "") -> PipelineError:
        return cls(ErrorKind.NOT_FOUND, detail)

    @classmethod
    def internal(cls, detail: str = "", *, cause: BaseException | None = None) -> PipelineError:
        return cls(ErrorKind.INTERNAL, detail, cause=cause)

    def __repr__(self) -> str:
        return f"PipelineError(kind={self.kind.name}, detail={self.detail!r})"


# --- Module Notes -----------------------------------------------------------
# Clients raise with `raise PipelineError.internal(...) from exc` so both `cause`
# and `__cause__` point at the lower-layer failure.
