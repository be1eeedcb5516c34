from pathlib import Path
from typing import Optional

import ujson

from gas_estimation.clients.transport import Transport
from gas_estimation.estimators.base_estimator import HttpGasPriceEstimating
from gas_estimation.models.gas_models import (
    EstimatedGasPrice,
    EstimationLimits,
    GasPrice1559,
)
from gas_estimation.models.oracle_models import (
    BlocknativeBlockPrice,
    BlocknativeEstimatedPrice,
    BlocknativeResponse,
)

GWEI = 1e9

# (time limit in seconds, confidence of inclusion in the next block, %)
CONFIDENCE_BY_TIME_LIMIT = [
    (15, 99),
    (30, 95),
    (60, 90),
    (120, 80),
]
LOWEST_CONFIDENCE = 70


def confidence_for_time_limit(time_limit: float) -> int:
    for max_time, confidence in CONFIDENCE_BY_TIME_LIMIT:
        if time_limit <= max_time:
            return confidence
    return LOWEST_CONFIDENCE


class BlocknativeGasStation(HttpGasPriceEstimating):
    """Docs: https://docs.blocknative.com/gas-prediction/gas-platform"""

    API_URL = 'https://api.blocknative.com/gasprices/blockprices'

    with open(Path(__file__).parent / 'config.json') as f:
        ESTIMATOR_NAME = ujson.load(f)['name']

    def __init__(
        self,
        transport: Transport,
        api_key: str,
        limits: Optional[EstimationLimits] = None,
    ):
        super().__init__(transport=transport, limits=limits)
        self.headers = {'Authorization': api_key}

    @staticmethod
    def _choose_price(
        block_price: BlocknativeBlockPrice, confidence: int
    ) -> BlocknativeEstimatedPrice:
        """Lowest price with at least the requested confidence, or the most confident one."""
        prices = sorted(block_price.estimated_prices, key=lambda p: p.confidence)
        for price in prices:
            if price.confidence >= confidence:
                return price
        return prices[-1]

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        response = await self._get_response(
            self.API_URL, BlocknativeResponse, headers=self.headers
        )
        try:
            block_price = response.block_prices[0]
            price = self._choose_price(
                block_price, confidence_for_time_limit(time_limit)
            )
        except IndexError as e:
            raise self.handle_exception(e, url=self.API_URL) from e
        return EstimatedGasPrice(
            legacy=price.price * GWEI,
            eip1559=GasPrice1559(
                base_fee_per_gas=block_price.base_fee_per_gas * GWEI,
                max_fee_per_gas=price.max_fee_per_gas * GWEI,
                max_priority_fee_per_gas=price.max_priority_fee_per_gas * GWEI,
            ),
        )
