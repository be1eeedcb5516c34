from typing import Sequence, TypeVar

import aiohttp

from gas_estimation.clients.blockchain.web3_client import Web3Client
from gas_estimation.clients.transport import AiohttpTransport
from gas_estimation.config import Config
from gas_estimation.estimators.base_estimator import GasPriceEstimating
from gas_estimation.estimators.blocknative import BlocknativeGasStation
from gas_estimation.estimators.eth_node import NodeGasEstimator
from gas_estimation.estimators.ethgasstation import EthGasStation
from gas_estimation.estimators.gasnow import GasNowGasStation
from gas_estimation.estimators.gnosis_safe import GnosisSafeGasStation
from gas_estimation.estimators.priority import (
    PriorityGasPriceEstimating,
    TimeBudgetPolicy,
)

T = TypeVar("T")


class EstimatorRegistry:
    def __init__(self, *estimators: GasPriceEstimating):
        self.estimator_by_name = {
            estimator.ESTIMATOR_NAME: estimator for estimator in estimators
        }

    def __getitem__(self, estimator_name: str) -> GasPriceEstimating:
        return self.estimator_by_name[estimator_name]

    def __contains__(self, estimator_name: str) -> bool:
        return estimator_name in self.estimator_by_name

    def get(self, estimator_name: str, default: T = None) -> GasPriceEstimating | T:
        return self.estimator_by_name.get(estimator_name, default)

    def prioritized(self, estimator_names: Sequence[str]) -> list[GasPriceEstimating]:
        """Registered estimators in the given order, unknown names are skipped."""
        return [self[name] for name in estimator_names if name in self]


def create_estimator_registry(
    config: Config, session: aiohttp.ClientSession
) -> EstimatorRegistry:
    limits = config.get_estimation_limits()
    transport = AiohttpTransport(session, timeout=config.REQUEST_TIMEOUT)
    estimators = [
        NodeGasEstimator(
            Web3Client(config.WEB3_URL, timeout=config.WEB3_TIMEOUT),
            limits=limits,
        ),
        GnosisSafeGasStation(transport, limits=limits),
        EthGasStation(transport, api_key=config.ETHGASSTATION_API_KEY, limits=limits),
        GasNowGasStation(transport, limits=limits),
    ]
    if config.BLOCKNATIVE_API_KEY:
        estimators.append(
            BlocknativeGasStation(
                transport, api_key=config.BLOCKNATIVE_API_KEY, limits=limits
            )
        )
    return EstimatorRegistry(*estimators)


def create_priority_estimator(
    config: Config, registry: EstimatorRegistry
) -> PriorityGasPriceEstimating:
    return PriorityGasPriceEstimating(
        registry.prioritized(config.GAS_ESTIMATORS),
        policy=TimeBudgetPolicy(config.TIME_BUDGET_POLICY),
        limits=config.get_estimation_limits(),
    )
