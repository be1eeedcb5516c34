from gas_estimation.estimators.blocknative.blocknative_estimator import BlocknativeGasStation
