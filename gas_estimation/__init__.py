from gas_estimation.models.gas_models import (
    EstimatedGasPrice,
    EstimationLimits,
    GasPrice1559,
    GasPriceKind,
)
