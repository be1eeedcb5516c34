from pathlib import Path

import ujson

from gas_estimation.estimators.base_estimator import HttpGasPriceEstimating
from gas_estimation.models.gas_models import EstimatedGasPrice
from gas_estimation.models.oracle_models import GasNowResponse
from gas_estimation.utils.linear_interpolation import interpolate

# Seconds GasNow expects a transaction to wait for each of its price levels.
RAPID = 15
FAST = 60
STANDARD = 180
SLOW = 600


class GasNowGasStation(HttpGasPriceEstimating):
    """Docs: https://taichi.network/#gasnow"""

    API_URL = 'https://www.gasnow.org/api/v3/gas/price?utm_source=gas-estimation'

    with open(Path(__file__).parent / 'config.json') as f:
        ESTIMATOR_NAME = ujson.load(f)['name']

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        response = await self._get_response(self.API_URL, GasNowResponse)
        try:
            if response.code != 200:
                raise ValueError(f'Unexpected response code {response.code}')
        except ValueError as e:
            raise self.handle_exception(e, url=self.API_URL) from e
        prices = response.data
        points = [
            (RAPID, prices.rapid),
            (FAST, prices.fast),
            (STANDARD, prices.standard),
            (SLOW, prices.slow),
        ]
        return EstimatedGasPrice(legacy=interpolate(time_limit, points))
