from typing import Optional, Tuple

from aiocache import cached

from gas_estimation.config import Config
from gas_estimation.estimators.priority import PriorityGasPriceEstimating
from gas_estimation.models.gas_models import EstimatedGasPrice, GasPriceResponse
from gas_estimation.utils.cache import get_cache_config
from gas_estimation.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)


class GasService:
    def __init__(self, *, config: Config, estimator: PriorityGasPriceEstimating):
        self.config = config
        self.estimator = estimator

        self.get_gas_price_with_source = cached(
            ttl=config.GAS_CACHE_TTL, **get_cache_config(config)
        )(self.get_gas_price_with_source)

    @property
    def sources(self) -> list[str]:
        return self.estimator.estimator_names

    async def get_gas_price_with_source(
        self,
        gas_limit: Optional[float] = None,
        time_limit: Optional[float] = None,
    ) -> Tuple[str, EstimatedGasPrice]:
        """Estimated price and the name of the estimator that answered, cached for GAS_CACHE_TTL."""
        limits = self.estimator.limits
        gas_limit = gas_limit or limits.gas_limit
        time_limit = time_limit or limits.time_limit
        logger.debug(
            'Estimating gas price',
            extra={LogArgs.gas_limit: gas_limit, LogArgs.time_limit: time_limit},
        )
        return await self.estimator.estimate_with_source(gas_limit, time_limit)

    async def get_gas_price(
        self,
        gas_limit: Optional[float] = None,
        time_limit: Optional[float] = None,
    ) -> EstimatedGasPrice:
        _, price = await self.get_gas_price_with_source(gas_limit, time_limit)
        return price

    async def get_gas_price_response(
        self,
        gas_limit: Optional[float] = None,
        time_limit: Optional[float] = None,
        bump: Optional[float] = None,
        max_price: Optional[int] = None,
    ) -> GasPriceResponse:
        """
        Estimate the gas price and prepare it to be sent with a transaction.

        Args:
            gas_limit:Optional[float]: Gas the transaction uses, defaults to a plain transfer
            time_limit:Optional[float]: Seconds the transaction should be mined within
            bump:Optional[float]: Factor to scale the price by, e.g. to resubmit a stuck transaction
            max_price:Optional[int]: Maximum price per unit of gas the sender is willing to pay, in wei

        Returns:
            GasPriceResponse with prices rounded up to whole wei and never above max_price
        """
        source, price = await self.get_gas_price_with_source(gas_limit, time_limit)
        if bump:
            price = price.scale_up(bump)
        price = price.round_up()
        if max_price is not None:
            price = price.limit_cap(max_price)
        return GasPriceResponse.from_estimate(price, source, self.sources)
