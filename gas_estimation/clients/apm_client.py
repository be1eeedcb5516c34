from elasticapm.base import Client
from elasticapm.contrib.starlette import make_apm_client

from gas_estimation.config import Config


class ApmClient:
    """Elastic APM client of the service, configured from APMConfig."""

    def __init__(self, config: Config):
        self.client: Client = make_apm_client(
            {
                'SERVICE_NAME': config.SERVICE_NAME,
                'SERVICE_VERSION': config.VERSION,
                'SERVER_URL': config.APM_SERVER_URL,
                'ENVIRONMENT': config.ENVIRONMENT,
                'ENABLED': config.APM_ENABLED,
                'RECORDING': config.APM_RECORDING,
                'CAPTURE_HEADERS': config.APM_CAPTURE_HEADERS,
                'LOG_LEVEL': config.LOG_LEVEL,
            }
        )
