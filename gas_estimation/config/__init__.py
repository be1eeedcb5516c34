from pydantic_settings import SettingsConfigDict

from gas_estimation.config.apm import APMConfig
from gas_estimation.config.cache import CacheConfig
from gas_estimation.config.estimators import EstimatorsConfig
from gas_estimation.config.logger import LoggerConfig
from gas_estimation.models.gas_models import EstimationLimits


class Config(APMConfig, LoggerConfig, CacheConfig, EstimatorsConfig):
    SERVER_HOST: str = 'localhost'
    SERVER_PORT: int = 8000
    RELOAD: bool = True
    VERSION: str = '0.1.0'
    CORS_ORIGINS: list = ['*']
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: list = ['*']
    CORS_HEADERS: list = ['*']
    WORKERS_COUNT: int = 1

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    def get_estimation_limits(self) -> EstimationLimits:
        return EstimationLimits(
            gas_limit=self.DEFAULT_GAS_LIMIT,
            time_limit=self.DEFAULT_TIME_LIMIT,
        )


config = Config()
