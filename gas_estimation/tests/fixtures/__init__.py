from gas_estimation.tests.fixtures.aiohttp_session import *  # noqa: F401, F403
from gas_estimation.tests.fixtures.estimators import *  # noqa: F401, F403
