import pytest
from fastapi.testclient import TestClient

from gas_estimation.config import Config
from gas_estimation.rest_api import dependencies
from gas_estimation.rest_api.create_app import create_app
from gas_estimation.services.gas_service import GasService
from gas_estimation.tests.fixtures import *  # noqa: F401, F403


@pytest.fixture()
def config() -> Config:
    return Config(
        CACHE='memory',
        BLOCKNATIVE_API_KEY='test_key',
        DEFAULT_GAS_LIMIT=21000,
        DEFAULT_TIME_LIMIT=30,
    )


@pytest.fixture()
def gas_client(config, gas_service: GasService) -> TestClient:
    app = create_app(config=config)
    app.dependency_overrides[dependencies.gas_service] = lambda: gas_service
    with TestClient(app) as client:
        yield client
