"""
cep_weather.api.errors

Request handling shared by `POST /cep` and `POST /weather`.

Responsibilities:
- Run a handler inside its SERVER span (parented on the inbound trace context).
- Decode/validate the CEP body before delegating.
- Cancel the delegated work when the client disconnects.
- Render every failure as `{"message": ...}` with the kind's status code,
  tagging the span with an `error_response` event first.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import anyio
from opentelemetry.trace import Span, Status, StatusCode
from starlette.requests import ClientDisconnect, Request
from starlette.responses import JSONResponse, Response

from cep_weather.errors import ErrorKind, PipelineError
from cep_weather.models import ErrorResponse, parse_cep_request
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing, record_error_response

log = get_logger(__name__)

CLIENT_DISCONNECTED_EVENT = "client_disconnected"
# nginx's "client closed request"; only the access log ever sees it.
CLIENT_CLOSED_REQUEST = 499


def error_response(span: Span, err: PipelineError) -> JSONResponse:
    record_error_response(span, err.status_code)
    if err.kind is ErrorKind.INTERNAL:
        # 4xx are caller problems; only 5xx mark the server span as failed.
        span.set_status(Status(StatusCode.ERROR, err.detail))
    body = ErrorResponse(message=err.kind.message)
    return JSONResponse(body.model_dump(), status_code=err.status_code)


async def run_until_disconnect(
    request: Request, work: Callable[[], Awaitable[Response]]
) -> Response | None:
    """
    Await `work()` while watching the ASGI receive channel.

    An `http.disconnect` cancels the work (and every outbound call it is awaiting)
    and returns None. Exceptions from `work` are re-raised unwrapped.
    """

    result: Response | None = None
    failure: Exception | None = None

    async with anyio.create_task_group() as tg:

        async def _run() -> None:
            nonlocal result, failure
            try:
                result = await work()
            except Exception as e:
                # Kept out of the task group so callers see the original type.
                failure = e
            tg.cancel_scope.cancel()

        async def _watch() -> None:
            while True:
                message = await request.receive()
                if message["type"] == "http.disconnect":
                    tg.cancel_scope.cancel()
                    return

        tg.start_soon(_watch)
        tg.start_soon(_run)

    if failure is not None:
        raise failure
    return result


def _disconnected(span: Span) -> Response:
    log.info("client_disconnected")
    span.add_event(CLIENT_DISCONNECTED_EVENT)
    return Response(status_code=CLIENT_CLOSED_REQUEST)


async def handle_cep_request(
    request: Request,
    *,
    tracing: Tracing,
    span_name: str,
    work: Callable[[str], Awaitable[Response]],
) -> Response:
    with tracing.server_span(span_name, request.headers) as span:
        try:
            code = parse_cep_request(await request.body())
            span.set_attribute("cep", code)
            response = await run_until_disconnect(request, lambda: work(code))
            if response is None:
                return _disconnected(span)
            return response
        except ClientDisconnect:
            return _disconnected(span)
        except PipelineError as e:
            log.info("request_failed", kind=e.kind.name, detail=e.detail)
            return error_response(span, e)
        except Exception as e:
            # Unexpected failures still answer with the INTERNAL envelope; nothing leaks.
            log.exception("unhandled_error")
            span.record_exception(e)
            return error_response(span, PipelineError.internal(str(e), cause=e))


# --- Module Notes -----------------------------------------------------------
# The span is opened before the body is read so that decode/validation failures
# are also visible in the trace.
#
# Starlette does not cancel a handler when its client goes away, so the watcher in
# `run_until_disconnect` is what bounds outbound calls to the request's lifetime.
# Tasks started in the group copy the current contextvars, so provider CLIENT spans
# still nest under the SERVER span and log lines keep the request id.
