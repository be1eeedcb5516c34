from pydantic_settings import BaseSettings


class EstimatorsConfig(BaseSettings):
    # Plain value transfer estimated within a generous window.
    DEFAULT_GAS_LIMIT: float = 21000.0
    DEFAULT_TIME_LIMIT: float = 30.0
    # Priority order, most trusted first.
    GAS_ESTIMATORS: list[str] = [
        'blocknative',
        'eth_node',
        'gnosis_safe',
        'ethgasstation',
        'gasnow',
    ]
    TIME_BUDGET_POLICY: str = 'full_remaining'
    REQUEST_TIMEOUT: float = 7
    WEB3_URL: str = 'http://localhost:8545'
    WEB3_TIMEOUT: int = 10
    BLOCKNATIVE_API_KEY: str = ''
    ETHGASSTATION_API_KEY: str = ''
