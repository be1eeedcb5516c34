from typing import List, Optional, Union

from aiohttp import ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception
from web3.types import FeeHistory

from gas_estimation.utils.logger import get_logger

logger = get_logger(__name__)


class Web3Client:

    def __init__(self, uri: str, timeout: Optional[float] = None):
        request_kwargs = {'timeout': ClientTimeout(total=timeout)} if timeout else None
        self.w3 = AsyncWeb3(
            AsyncHTTPProvider(endpoint_uri=uri, request_kwargs=request_kwargs)
        )

    @property
    def endpoint_uri(self) -> str:
        return self.w3.provider.endpoint_uri

    async def get_gas_price(self) -> int:
        return await self.w3.eth.gas_price

    async def get_fee_history(self,
                              block_count: int,
                              newest_block: Union[int, str] = 'latest',
                              reward_percentiles: Optional[List[float]] = None) -> Optional[FeeHistory]:
        node_uri = self.endpoint_uri
        try:
            response: FeeHistory = await self.w3.eth.fee_history(block_count, newest_block, reward_percentiles)
        except (ValueError, Web3Exception) as e:
            logger.error(f"Issue getting fee history from {node_uri}, probably node does not support EIP-1559 {e}")
            return None
        if not response.get('reward'):
            logger.error(f'Node {node_uri} not have fee history data for block {newest_block}')
            return None
        return response
