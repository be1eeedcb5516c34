import asyncio
from typing import Optional
from unittest.mock import AsyncMock, Mock

import pytest

from gas_estimation.clients.blockchain.web3_client import Web3Client
from gas_estimation.clients.transport import Transport
from gas_estimation.estimators.base_estimator import GasPriceEstimating
from gas_estimation.estimators.priority import PriorityGasPriceEstimating
from gas_estimation.models.gas_models import (
    EstimatedGasPrice,
    EstimationLimits,
    GasPrice1559,
)
from gas_estimation.services.gas_service import GasService


class FakeEstimator(GasPriceEstimating):
    """Answers with a fixed price or error, optionally after a delay."""

    def __init__(
        self,
        name: str,
        result: Optional[EstimatedGasPrice] = None,
        error: Optional[Exception] = None,
        delay: float = 0,
        limits: Optional[EstimationLimits] = None,
    ):
        super().__init__(limits=limits)
        self.ESTIMATOR_NAME = name
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []
        self.cancelled = False
        self.finished = False

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        self.calls.append((gas_limit, time_limit))
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        self.finished = True
        if self.error:
            raise self.error
        return self.result


def transport_returning(payload) -> Mock:
    """Transport mock validating payload into the requested model, like AiohttpTransport does."""
    transport = Mock(spec=Transport)

    async def get_json(url, headers=None, response_model=None):
        if response_model is None:
            return payload
        return response_model.model_validate(payload)

    transport.get_json = AsyncMock(side_effect=get_json)
    return transport


@pytest.fixture()
def legacy_price() -> EstimatedGasPrice:
    return EstimatedGasPrice(legacy=10)


@pytest.fixture()
def eip1559_price() -> EstimatedGasPrice:
    return EstimatedGasPrice(
        legacy=30,
        eip1559=GasPrice1559(
            base_fee_per_gas=20,
            max_fee_per_gas=100,
            max_priority_fee_per_gas=2,
        ),
    )


@pytest.fixture()
def web3_client() -> Mock:
    client = Mock(spec=Web3Client)
    client.endpoint_uri = 'http://localhost:8545'
    client.get_gas_price = AsyncMock(return_value=30 * 10**9)
    client.get_fee_history = AsyncMock(
        return_value={
            'baseFeePerGas': [10, 11, 12, 13, 14],
            'gasUsedRatio': [0.5, 0.5, 0.5, 0.5],
            'oldestBlock': 100,
            'reward': [[1, 2, 3], [1, 2, 3], [2, 3, 4], [0, 1, 2]],
        }
    )
    return client


@pytest.fixture()
def fake_estimator(eip1559_price) -> FakeEstimator:
    return FakeEstimator('fake', result=eip1559_price)


@pytest.fixture()
async def gas_service(config, fake_estimator) -> GasService:
    service = GasService(
        config=config,
        estimator=PriorityGasPriceEstimating(
            [fake_estimator], limits=config.get_estimation_limits()
        ),
    )
    await service.get_gas_price_with_source.cache.clear()
    return service
