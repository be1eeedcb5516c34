from pathlib import Path

import ujson

from gas_estimation.estimators.base_estimator import HttpGasPriceEstimating
from gas_estimation.models.gas_models import EstimatedGasPrice
from gas_estimation.models.oracle_models import GnosisSafeResponse
from gas_estimation.utils.linear_interpolation import interpolate

FASTEST = 15
FAST = 60
STANDARD = 300
SAFE_LOW = 30 * 60


class GnosisSafeGasStation(HttpGasPriceEstimating):
    """Docs: https://safe-relay.gnosis.io/"""

    API_URL = 'https://safe-relay.gnosis.io/api/v1/gas-station/'

    with open(Path(__file__).parent / 'config.json') as f:
        ESTIMATOR_NAME = ujson.load(f)['name']

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        response = await self._get_response(self.API_URL, GnosisSafeResponse)
        points = [
            (FASTEST, response.fastest),
            (FAST, response.fast),
            (STANDARD, response.standard),
            (SAFE_LOW, response.safe_low),
        ]
        return EstimatedGasPrice(legacy=interpolate(time_limit, points))
