from pydantic import BaseModel, ConfigDict, Field


class EthGasStationResponse(BaseModel):
    """Prices are in 10 * gwei, waits are in minutes."""

    model_config = ConfigDict(populate_by_name=True)

    fastest: float
    fast: float
    average: float
    safe_low: float = Field(alias='safeLow')
    fastest_wait: float = Field(alias='fastestWait')
    fast_wait: float = Field(alias='fastWait')
    avg_wait: float = Field(alias='avgWait')
    safe_low_wait: float = Field(alias='safeLowWait')
    block_num: int = Field(0, alias='blockNum')


class GasNowPrices(BaseModel):
    rapid: float
    fast: float
    standard: float
    slow: float
    timestamp: int


class GasNowResponse(BaseModel):
    code: int
    data: GasNowPrices


class GnosisSafeResponse(BaseModel):
    """Prices are decimal strings in wei."""

    model_config = ConfigDict(populate_by_name=True)

    last_update: str = Field(alias='lastUpdate')
    lowest: float
    safe_low: float = Field(alias='safeLow')
    standard: float
    fast: float
    fastest: float


class BlocknativeEstimatedPrice(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    confidence: int
    price: float
    max_priority_fee_per_gas: float = Field(alias='maxPriorityFeePerGas')
    max_fee_per_gas: float = Field(alias='maxFeePerGas')


class BlocknativeBlockPrice(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_number: int = Field(alias='blockNumber')
    base_fee_per_gas: float = Field(alias='baseFeePerGas')
    estimated_prices: list[BlocknativeEstimatedPrice] = Field(
        alias='estimatedPrices'
    )


class BlocknativeResponse(BaseModel):
    """Prices are in gwei."""

    model_config = ConfigDict(populate_by_name=True)

    system: str = 'ethereum'
    network: str = 'main'
    block_prices: list[BlocknativeBlockPrice] = Field(alias='blockPrices')
