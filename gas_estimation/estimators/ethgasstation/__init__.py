from gas_estimation.estimators.ethgasstation.ethgasstation_estimator import EthGasStation
