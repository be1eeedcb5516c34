from unittest.mock import AsyncMock

import pytest
from aiohttp import ClientConnectionError

from gas_estimation.estimators.eth_node import NodeGasEstimator
from gas_estimation.estimators.eth_node.node_estimator import (
    FEE_HISTORY_BLOCKS,
    REWARD_PERCENTILES,
)
from gas_estimation.utils.errors import ParseResponseError, TransportError


@pytest.mark.parametrize(
    'time_limit, priority_fee',
    [(5, 3), (15, 3), (37.5, 2.5), (60, 2), (120, 1.5), (180, 1), (600, 1)],
)
async def test_node_estimator_eip1559(web3_client, time_limit, priority_fee):
    estimator = NodeGasEstimator(web3_client)

    price = await estimator.estimate_with_limits(21000, time_limit)

    assert price.legacy == 30 * 10**9
    assert price.eip1559.base_fee_per_gas == 14
    assert price.eip1559.max_priority_fee_per_gas == pytest.approx(priority_fee)
    assert price.eip1559.max_fee_per_gas == pytest.approx(14 * 2 + priority_fee)
    web3_client.get_fee_history.assert_awaited_once_with(
        FEE_HISTORY_BLOCKS, 'latest', REWARD_PERCENTILES
    )


async def test_node_estimator_legacy_chain(web3_client):
    web3_client.get_fee_history = AsyncMock(return_value=None)
    estimator = NodeGasEstimator(web3_client)

    price = await estimator.estimate()

    assert price.legacy == 30 * 10**9
    assert price.eip1559 is None


async def test_node_estimator_connection_error(web3_client):
    web3_client.get_gas_price = AsyncMock(side_effect=ClientConnectionError('refused'))
    estimator = NodeGasEstimator(web3_client)

    with pytest.raises(TransportError) as exc_info:
        await estimator.estimate()
    assert exc_info.value.estimator == 'eth_node'
    assert exc_info.value.kwargs['web3_url'] == 'http://localhost:8545'


async def test_node_estimator_malformed_fee_history(web3_client):
    web3_client.get_fee_history = AsyncMock(return_value={'baseFeePerGas': [], 'reward': [[1, 2, 3]]})
    estimator = NodeGasEstimator(web3_client)

    with pytest.raises(ParseResponseError):
        await estimator.estimate()
