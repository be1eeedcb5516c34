from pathlib import Path
from typing import Optional

import ujson

from gas_estimation.clients.transport import Transport
from gas_estimation.estimators.base_estimator import HttpGasPriceEstimating
from gas_estimation.models.gas_models import EstimatedGasPrice, EstimationLimits
from gas_estimation.models.oracle_models import EthGasStationResponse
from gas_estimation.utils.linear_interpolation import interpolate
from gas_estimation.utils.logger import get_logger

logger = get_logger(__name__)

# ethgasstation returns 10x gwei
UNIT_TO_WEI = 1e8


class EthGasStation(HttpGasPriceEstimating):
    """Docs: https://docs.ethgasstation.info/gas-price"""

    API_URL = 'https://ethgasstation.info/api/ethgasAPI.json'

    with open(Path(__file__).parent / 'config.json') as f:
        ESTIMATOR_NAME = ujson.load(f)['name']

    def __init__(
        self,
        transport: Transport,
        api_key: str = '',
        limits: Optional[EstimationLimits] = None,
    ):
        super().__init__(transport=transport, limits=limits)
        self.api_key = api_key

    def _url(self) -> str:
        if not self.api_key:
            return self.API_URL
        return f'{self.API_URL}?api-key={self.api_key}'

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        response = await self._get_response(self._url(), EthGasStationResponse)
        logger.debug('Got gas prices from ethgasstation for block %s', response.block_num)
        # (wait in seconds, price)
        points = sorted(
            [
                (response.fastest_wait * 60, response.fastest),
                (response.fast_wait * 60, response.fast),
                (response.avg_wait * 60, response.average),
                (response.safe_low_wait * 60, response.safe_low),
            ]
        )
        return EstimatedGasPrice(legacy=interpolate(time_limit, points) * UNIT_TO_WEI)
