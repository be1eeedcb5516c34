from contextlib import asynccontextmanager

import aiohttp
import pydantic
from elasticapm.contrib.starlette import ElasticAPM
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from gas_estimation.clients.apm_client import ApmClient
from gas_estimation.config import Config
from gas_estimation.estimators import (
    create_estimator_registry,
    create_priority_estimator,
)
from gas_estimation.rest_api import dependencies
from gas_estimation.rest_api.middlewares import RouteLoggerMiddleware
from gas_estimation.rest_api.routes.gas import gas_routes
from gas_estimation.services.gas_service import GasService
from gas_estimation.utils.errors import BaseGasEstimationError
from gas_estimation.utils.logger import get_logger

logger = get_logger(__name__)


def setup_dependencies(
    app: FastAPI, config: Config, aiohttp_session: aiohttp.ClientSession
) -> dependencies.Dependencies:
    """Build the estimators and the gas service on top of the session and keep them in app.state."""
    estimator_registry = create_estimator_registry(config, aiohttp_session)
    estimator = create_priority_estimator(config, estimator_registry)
    logger.info('Gas estimators in order of priority: %s', estimator.estimator_names)
    deps = dependencies.Dependencies(
        gas_service=GasService(config=config, estimator=estimator),
    )
    deps.register(app)
    return deps


def create_app(config: Config) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # aiohttp wants the session to be created inside of a running loop
        async with aiohttp.ClientSession(trust_env=True) as aiohttp_session:
            setup_dependencies(app, config, aiohttp_session)
            yield

    app = FastAPI(
        title='Gas Estimation API',
        description=(
            """Estimates the gas price of Ethereum transactions.
            Gas price oracles and a node are asked one by one in order of priority,
            the first price received is returned for legacy and EIP-1559 transactions."""
        ),
        version=config.VERSION,
        docs_url='/',
        redoc_url='/docs',
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_CREDENTIALS,
        allow_methods=config.CORS_METHODS,
        allow_headers=config.CORS_HEADERS,
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RouteLoggerMiddleware)
    if config.APM_ENABLED:
        app.add_middleware(ElasticAPM, client=ApmClient(config).client)

    app.include_router(gas_routes, prefix='/v1/gas', tags=['Gas'])
    register_exception_handlers(app, config)

    @app.get('/health_check', include_in_schema=False)
    def health_check():
        return Response('OK')

    return app


def register_exception_handlers(app: FastAPI, config: Config):
    @app.exception_handler(BaseGasEstimationError)
    async def handle_gas_estimation_error(
        request: Request, exc: BaseGasEstimationError
    ):  # pylint: disable=unused-argument
        return exc.to_http_exception()

    @app.exception_handler(pydantic.ValidationError)
    async def handle_validation_error(
        request: Request, exc: pydantic.ValidationError
    ):  # pylint: disable=unused-argument
        return JSONResponse({'message': exc.errors()}, status_code=422)

    # RFC 5741 style body for anything unexpected, https://tools.ietf.org/html/rfc5741#section-2
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        name = exc.__class__.__name__
        body = {
            'type': 'Internal Server Error',
            'title': name,
            'instance': f'{config.SERVER_HOST}{request.url.path}',
            'detail': f'{name} at {exc} when executing {request.method} request',
        }
        logger.error('Exception when %s: %s', body['instance'], body['detail'])
        return JSONResponse(body, status_code=500)
