from gas_estimation.estimators.gnosis_safe.gnosis_safe_estimator import GnosisSafeGasStation
