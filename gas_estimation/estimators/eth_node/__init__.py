from gas_estimation.estimators.eth_node.node_estimator import NodeGasEstimator
