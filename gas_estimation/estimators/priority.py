import asyncio
from enum import Enum
from typing import Optional, Sequence, Tuple

from gas_estimation.estimators.base_estimator import GasPriceEstimating
from gas_estimation.models.gas_models import EstimatedGasPrice, EstimationLimits
from gas_estimation.utils.errors import AllSourcesExhaustedError, EstimatorTimeoutError
from gas_estimation.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)


class TimeBudgetPolicy(str, Enum):
    """How the remaining time budget is given to the next source."""

    FULL_REMAINING = 'full_remaining'
    EVEN_SPLIT = 'even_split'

    def time_slice(self, remaining: float, sources_left: int) -> float:
        if self is TimeBudgetPolicy.EVEN_SPLIT:
            return remaining / sources_left
        return remaining


class PriorityGasPriceEstimating(GasPriceEstimating):
    """
    Ask estimators one by one in order of priority and return the first price.

    The order expresses preference, not a race: a slower trusted source is
    preferred over a faster one as long as it answers within its slice of the
    time budget. The slice only bounds how long the source is waited for,
    every source is asked for the caller's time_limit so the price does not
    depend on its position in the list. A failed or timed out source is
    never retried within one call, the next source is asked instead. If every
    source fails, AllSourcesExhaustedError carries their failures in
    priority order.
    """

    ESTIMATOR_NAME = 'priority'

    def __init__(
        self,
        estimators: Sequence[GasPriceEstimating],
        policy: TimeBudgetPolicy = TimeBudgetPolicy.FULL_REMAINING,
        limits: Optional[EstimationLimits] = None,
    ):
        super().__init__(limits=limits)
        if not estimators:
            raise ValueError('At least one estimator is required')
        self.estimators = tuple(estimators)
        self.policy = TimeBudgetPolicy(policy)

    @property
    def estimator_names(self) -> list[str]:
        return [estimator.ESTIMATOR_NAME for estimator in self.estimators]

    async def estimate_with_limits(
        self, gas_limit: float, time_limit: float
    ) -> EstimatedGasPrice:
        _, price = await self.estimate_with_source(gas_limit, time_limit)
        return price

    async def estimate_with_source(
        self, gas_limit: float, time_limit: float
    ) -> Tuple[str, EstimatedGasPrice]:
        """Same as estimate_with_limits, also returns the name of the estimator that answered."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + time_limit
        failures: list[Exception] = []

        for priority, estimator in enumerate(self.estimators):
            remaining = deadline - loop.time()
            if remaining <= 0:
                failures.append(
                    EstimatorTimeoutError(
                        estimator.ESTIMATOR_NAME,
                        'Time budget exhausted before the source was asked',
                        priority=priority,
                    )
                )
                continue

            time_slice = self.policy.time_slice(
                remaining, len(self.estimators) - priority
            )
            try:
                # wait_for cancels the pending call once its slice lapses
                price = await asyncio.wait_for(
                    estimator.estimate_with_limits(gas_limit, time_limit),
                    timeout=time_slice,
                )
                return estimator.ESTIMATOR_NAME, price
            except asyncio.TimeoutError:
                failure = EstimatorTimeoutError(
                    estimator.ESTIMATOR_NAME,
                    f'No price within {time_slice:.3f}s',
                    priority=priority,
                )
            except Exception as e:
                failure = e
            failures.append(failure)
            logger.warning(
                'Gas estimator %(gas_estimator)s failed, trying next one',
                {LogArgs.gas_estimator: estimator.ESTIMATOR_NAME},
                extra={
                    LogArgs.priority: priority,
                    LogArgs.ex: repr(failure),
                    LogArgs.time_limit: time_limit,
                    LogArgs.time_slice: time_slice,
                },
            )

        exc = AllSourcesExhaustedError(
            self.ESTIMATOR_NAME,
            failures,
            gas_limit=gas_limit,
            time_limit=time_limit,
        )
        logger.error(*exc.to_log_args(), extra=exc.to_dict())
        raise exc
