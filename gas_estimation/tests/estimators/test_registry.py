from gas_estimation.config import Config
from gas_estimation.estimators import (
    EstimatorRegistry,
    create_estimator_registry,
    create_priority_estimator,
)
from gas_estimation.estimators.blocknative import BlocknativeGasStation
from gas_estimation.estimators.priority import TimeBudgetPolicy
from gas_estimation.tests.fixtures.estimators import FakeEstimator


def test_registry_lookup(legacy_price):
    a = FakeEstimator('a', result=legacy_price)
    b = FakeEstimator('b', result=legacy_price)
    registry = EstimatorRegistry(a, b)

    assert registry['a'] is a
    assert registry.get('c') is None
    assert 'b' in registry
    assert registry.prioritized(['b', 'c', 'a']) == [b, a]


async def test_create_estimator_registry(config, aiohttp_session):
    registry = create_estimator_registry(config, aiohttp_session)

    for name in ('blocknative', 'eth_node', 'gnosis_safe', 'ethgasstation', 'gasnow'):
        assert name in registry
    assert isinstance(registry['blocknative'], BlocknativeGasStation)
    assert registry['gasnow'].limits == config.get_estimation_limits()


async def test_create_estimator_registry_without_blocknative_key(aiohttp_session):
    config = Config(BLOCKNATIVE_API_KEY='')
    registry = create_estimator_registry(config, aiohttp_session)
    assert 'blocknative' not in registry


async def test_create_priority_estimator(aiohttp_session):
    config = Config(
        BLOCKNATIVE_API_KEY='',
        GAS_ESTIMATORS=['gasnow', 'blocknative', 'eth_node'],
        TIME_BUDGET_POLICY='even_split',
        DEFAULT_TIME_LIMIT=10,
    )
    registry = create_estimator_registry(config, aiohttp_session)

    estimator = create_priority_estimator(config, registry)

    assert estimator.estimator_names == ['gasnow', 'eth_node']
    assert estimator.policy is TimeBudgetPolicy.EVEN_SPLIT
    assert estimator.limits.time_limit == 10
