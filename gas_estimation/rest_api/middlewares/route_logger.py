import time
from typing import Callable, Optional, Sequence
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import Receive, Scope, Send

from gas_estimation.utils.logger import (
    CustomContextLogger,
    LogArgs,
    get_logger,
    set_correlation_id,
    set_session_id,
)

REQUEST_ID_HEADER = 'x-request-id'
SESSION_ID_HEADER = 'x-session-id'
CF_RAY_HEADER = 'cf-ray'


class RouteLoggerMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its duration and the estimation limits asked for.
    Each request gets a correlation id, taken from x-request-id or cf-ray
    when the caller sends one, so that the estimator logs of one request can
    be found together.
    """

    def __init__(
        self,
        app: FastAPI,
        *,
        logger: Optional[CustomContextLogger] = None,
        skip_routes: Sequence[str] = ('/health_check',),
    ):
        self._logger = logger or get_logger(__name__)
        self._skip_routes = tuple(skip_routes)
        super().__init__(app)

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        # Headers are immutable, the request id is added to the scope before dispatch
        if scope['type'] == 'http':
            headers = Headers(scope=scope)
            request_id = headers.get(REQUEST_ID_HEADER)
            if request_id is None:
                request_id = headers.get(CF_RAY_HEADER, uuid4().hex)
                scope['headers'].append((REQUEST_ID_HEADER.encode(), request_id.encode()))
            if SESSION_ID_HEADER in headers:
                set_session_id(headers[SESSION_ID_HEADER])
            set_correlation_id(request_id)
        await super().__call__(scope, receive, send)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith(self._skip_routes):
            return await call_next(request)

        log_args = {
            'request_method': request.method,
            'request_path': request.url.path,
            LogArgs.gas_limit: request.query_params.get('gas_limit'),
            LogArgs.time_limit: request.query_params.get('time_limit'),
        }
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._logger.exception(
                'Request failed with exception',
                extra={**log_args, 'response_status': 500},
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request.headers[REQUEST_ID_HEADER]
        log_args['request_duration'] = round(time.perf_counter() - started, 4)
        log_args['response_status'] = response.status_code
        if response.status_code < 500:
            self._logger.info('Request successful', extra=log_args)
        else:
            self._logger.warning('Request failed', extra=log_args)
        return response
