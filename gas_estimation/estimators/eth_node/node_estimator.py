import asyncio
from pathlib import Path
from statistics import StatisticsError, mean
from typing import Optional

import ujson
from aiohttp import ClientError
from web3.exceptions import Web3Exception

from gas_estimation.clients.blockchain.web3_client import Web3Client
from gas_estimation.estimators.base_estimator import GasPriceEstimating
from gas_estimation.models.gas_models import (
    EstimatedGasPrice,
    EstimationLimits,
    GasPrice1559,
)
from gas_estimation.utils.linear_interpolation import interpolate
from gas_estimation.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)

FEE_HISTORY_BLOCKS = 4
REWARD_PERCENTILES = [60, 75, 90]
# Seconds to wait for inclusion when paying the tip of each percentile.
PERCENTILE_WAIT = {90: 15, 75: 60, 60: 180}
# Headroom for base fee growth before the transaction is mined.
BASE_FEE_MULTIPLIER = 2


class NodeGasEstimator(GasPriceEstimating):
    """Estimates gas price from eth_gasPrice and eth_feeHistory of a node."""

    with open(Path(__file__).parent / 'config.json') as f:
        ESTIMATOR_NAME = ujson.load(f)['name']

    def __init__(self, web3_client: Web3Client, limits: Optional[EstimationLimits] = None):
        super().__init__(limits=limits)
        self.web3_client = web3_client

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        logger.debug(
            'Getting gas prices from node',
            extra={LogArgs.web3_url: self.web3_client.endpoint_uri},
        )
        try:
            gas_price, fee_history = await asyncio.gather(
                self.web3_client.get_gas_price(),
                self.web3_client.get_fee_history(
                    FEE_HISTORY_BLOCKS, 'latest', REWARD_PERCENTILES
                ),
            )
        except (ClientError, asyncio.TimeoutError, ValueError, Web3Exception) as e:
            raise self.handle_exception(
                e, web3_url=self.web3_client.endpoint_uri
            ) from e

        if fee_history is None:
            return EstimatedGasPrice(legacy=float(gas_price))

        try:
            # baseFee for next block
            base_fee = fee_history['baseFeePerGas'][-1]
            rewards = fee_history['reward']
            points = sorted(
                (PERCENTILE_WAIT[percentile], mean(reward[i] for reward in rewards))
                for i, percentile in enumerate(REWARD_PERCENTILES)
            )
        except (KeyError, IndexError, StatisticsError) as e:
            raise self.handle_exception(
                e, web3_url=self.web3_client.endpoint_uri
            ) from e

        priority_fee = interpolate(time_limit, points)
        return EstimatedGasPrice(
            legacy=float(gas_price),
            eip1559=GasPrice1559(
                base_fee_per_gas=float(base_fee),
                max_fee_per_gas=float(base_fee * BASE_FEE_MULTIPLIER + priority_fee),
                max_priority_fee_per_gas=float(priority_fee),
            ),
        )
