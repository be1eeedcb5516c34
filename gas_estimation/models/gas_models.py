import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def _min(value: float, ceiling: float) -> float:
    """IEEE minNum: a NaN operand yields the other operand."""
    if math.isnan(value):
        return ceiling
    if math.isnan(ceiling):
        return value
    return min(value, ceiling)


def _ceil(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.ceil(value))


def _check_factor(factor: float) -> None:
    if not factor > 0:
        raise ValueError(f'Scale factor must be positive, got {factor}')


class GasPriceKind(str, Enum):
    LEGACY = 'legacy'
    EIP1559 = 'eip1559'


class EstimationLimits(BaseModel):
    """Default arguments for GasPriceEstimating.estimate()."""

    model_config = ConfigDict(frozen=True)

    gas_limit: float = 21000.0
    time_limit: float = Field(30.0, description='Seconds')


class GasPrice1559(BaseModel):
    """
    Gas price for EIP-1559 transactions.
    base_fee_per_gas is only a snapshot of the pending block and is kept as
    an essential part of the estimation, it is never scaled or rounded.
    """

    model_config = ConfigDict(frozen=True)

    base_fee_per_gas: float
    max_fee_per_gas: float
    max_priority_fee_per_gas: float

    def effective_price(self) -> float:
        tip_price = self.max_priority_fee_per_gas + self.base_fee_per_gas
        # unordered comparison counts as equal and keeps max_fee_per_gas
        if tip_price < self.max_fee_per_gas:
            return tip_price
        return self.max_fee_per_gas

    def scale_up(self, factor: float) -> 'GasPrice1559':
        _check_factor(factor)
        return self.model_copy(
            update={
                'max_fee_per_gas': self.max_fee_per_gas * factor,
                'max_priority_fee_per_gas': self.max_priority_fee_per_gas * factor,
            }
        )

    def round_up(self) -> 'GasPrice1559':
        return self.model_copy(
            update={'max_fee_per_gas': _ceil(self.max_fee_per_gas)}
        )

    def limit_cap(self, cap: float) -> 'GasPrice1559':
        max_fee_per_gas = _min(self.max_fee_per_gas, cap)
        return self.model_copy(
            update={
                'max_fee_per_gas': max_fee_per_gas,
                # enforce max_priority_fee_per_gas <= max_fee_per_gas
                'max_priority_fee_per_gas': _min(
                    self.max_priority_fee_per_gas, max_fee_per_gas
                ),
            }
        )


class EstimatedGasPrice(BaseModel):
    """
    Main gas price structure returned by every estimator.
    Holds the estimated price for legacy transactions and, when the source
    supports it, the EIP-1559 price. If eip1559 is set, legacy is only a
    fallback for clients that can't send type 2 transactions.
    """

    model_config = ConfigDict(frozen=True)

    legacy: float
    eip1559: Optional[GasPrice1559] = None

    @property
    def kind(self) -> GasPriceKind:
        if self.eip1559 is None:
            return GasPriceKind.LEGACY
        return GasPriceKind.EIP1559

    def effective_price(self) -> float:
        """
        Price per unit of gas the transaction is expected to be charged.

        For EIP-1559 prices it is min(max_fee, priority_fee + base_fee).
        Beware that the price of the mined transaction could differ from this
        value because base_fee_per_gas can change between estimation and
        inclusion.
        """
        match self.kind:
            case GasPriceKind.EIP1559:
                return self.eip1559.effective_price()
            case GasPriceKind.LEGACY:
                return self.legacy

    def cap(self) -> float:
        """Maximum gas price the sender is willing to pay."""
        match self.kind:
            case GasPriceKind.EIP1559:
                return self.eip1559.max_fee_per_gas
            case GasPriceKind.LEGACY:
                return self.legacy

    def scale_up(self, factor: float) -> 'EstimatedGasPrice':
        """Bump the price by factor, e.g. to resubmit a stuck transaction."""
        _check_factor(factor)
        return EstimatedGasPrice(
            legacy=self.legacy * factor,
            eip1559=self.eip1559.scale_up(factor) if self.eip1559 else None,
        )

    def round_up(self) -> 'EstimatedGasPrice':
        """Ceil the prices that are sent on-chain as integers (legacy and max fee)."""
        return EstimatedGasPrice(
            legacy=_ceil(self.legacy),
            eip1559=self.eip1559.round_up() if self.eip1559 else None,
        )

    def limit_cap(self, cap: float) -> 'EstimatedGasPrice':
        """If the current cap is higher than the input, set it to the input."""
        return EstimatedGasPrice(
            legacy=_min(self.legacy, cap),
            eip1559=self.eip1559.limit_cap(cap) if self.eip1559 else None,
        )


class GasPriceResponse(BaseModel):
    source: str = Field(description='Estimator that answered')
    configured_sources: list[str] = Field(description='Estimators in order of priority')
    legacy: float
    eip1559: Optional[GasPrice1559] = None
    effective_price: float
    cap: float

    @classmethod
    def from_estimate(
        cls,
        estimate: EstimatedGasPrice,
        source: str,
        configured_sources: list[str],
    ) -> 'GasPriceResponse':
        return cls(
            source=source,
            configured_sources=configured_sources,
            legacy=estimate.legacy,
            eip1559=estimate.eip1559,
            effective_price=estimate.effective_price(),
            cap=estimate.cap(),
        )
