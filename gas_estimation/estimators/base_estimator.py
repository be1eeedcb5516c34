import asyncio
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Type

from aiohttp import ClientError

from gas_estimation.clients.transport import T, Transport
from gas_estimation.models.gas_models import EstimatedGasPrice, EstimationLimits
from gas_estimation.utils.errors import (
    BaseGasEstimationError,
    EstimatorTimeoutError,
    ParseResponseError,
    TransportError,
)
from gas_estimation.utils.logger import capture_exception, get_logger

logger = get_logger(__name__)


class GasPriceEstimating(ABC):
    """
    Estimates the gas price for a transaction.
    Implementations wrap exactly one source and must be safe to call
    concurrently, all the state they keep is immutable configuration.
    """

    ESTIMATOR_NAME = 'base_estimator'

    def __init__(self, limits: Optional[EstimationLimits] = None):
        self.limits = limits or EstimationLimits()

    async def estimate(self) -> EstimatedGasPrice:
        """Estimate the gas price for a transaction to be mined "quickly"."""
        return await self.estimate_with_limits(
            self.limits.gas_limit, self.limits.time_limit
        )

    @abstractmethod
    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        """
        Estimate the gas price for a transaction that uses gas_limit to be
        mined within time_limit.
        Args:
            gas_limit:float: Amount of gas the transaction uses
            time_limit:float: Seconds the transaction should be mined within

        Returns:
            EstimatedGasPrice, with eip1559 set if the source supports it.

        Raises:
            BaseGasEstimationError: If the source failed to produce a price
        """

    def handle_exception(
        self, exception: Exception, **kwargs
    ) -> BaseGasEstimationError:
        capture_exception()
        if isinstance(exception, BaseGasEstimationError):
            return exception
        if isinstance(exception, (KeyError, IndexError, ValueError)):
            # pydantic ValidationError and JSON decode errors are ValueErrors
            exc = ParseResponseError(self.ESTIMATOR_NAME, str(exception), **kwargs)
        elif isinstance(exception, asyncio.TimeoutError):
            exc = EstimatorTimeoutError(self.ESTIMATOR_NAME, str(exception), **kwargs)
        elif isinstance(exception, ClientError):
            exc = TransportError(self.ESTIMATOR_NAME, str(exception), **kwargs)
        else:
            exc = TransportError(
                self.ESTIMATOR_NAME,
                f'{exception.__class__.__name__}: {exception}',
                **kwargs,
            )
        logger.warning(*exc.to_log_args(), extra=exc.to_dict())
        return exc


class HttpGasPriceEstimating(GasPriceEstimating):
    """Base for oracles reached over HTTP through a Transport."""

    def __init__(self, transport: Transport, limits: Optional[EstimationLimits] = None):
        super().__init__(limits=limits)
        self.transport = transport

    async def _get_response(
        self,
        url: str,
        response_model: Type[T],
        headers: Optional[Mapping[str, str]] = None,
    ) -> T:
        try:
            return await self.transport.get_json(url, headers, response_model)
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            raise self.handle_exception(e, url=url) from e
