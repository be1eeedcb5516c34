from gas_estimation.estimators.gasnow.gasnow_estimator import GasNowGasStation
