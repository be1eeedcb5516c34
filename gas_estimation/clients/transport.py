from abc import ABC, abstractmethod
from typing import Mapping, Optional, Type, TypeVar, Union

import ujson
from aiohttp import ClientResponse, ClientResponseError, ClientSession, ClientTimeout
from pydantic import BaseModel

from gas_estimation.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T', bound=BaseModel)


class Transport(ABC):
    """Fetches JSON documents for the oracle clients."""

    @abstractmethod
    async def get_json(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        response_model: Optional[Type[T]] = None,
    ) -> Union[T, dict, list]:
        """
        Args:
            url:str: Url to GET
            headers:Optional[Mapping[str, str]]: Extra request headers, e.g. authorization
            response_model:Optional[Type[T]]: Pydantic model to validate the body into

        Returns:
            Validated response_model instance, or the decoded JSON if no model is given

        Raises:
            aiohttp.ClientError: Connection error or non-2xx response
            asyncio.TimeoutError: Request did not finish within the transport timeout
            pydantic.ValidationError: Body does not match response_model
        """


class AiohttpTransport(Transport):
    def __init__(self, session: ClientSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = ClientTimeout(total=timeout) if timeout else None

    async def get_json(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        response_model: Optional[Type[T]] = None,
    ) -> Union[T, dict, list]:
        kwargs = {'headers': dict(headers or {})}
        if self.timeout:
            kwargs['timeout'] = self.timeout
        async with self.session.get(url, **kwargs) as response:
            response: ClientResponse
            logger.debug(f'Request GET {response.url}')
            try:
                response.raise_for_status()
            except ClientResponseError as e:
                # Fix bug with HTTP status code 0.
                status = 500 if e.status not in range(100, 600) else e.status
                raise ClientResponseError(
                    request_info=e.request_info,
                    history=e.history,
                    status=status,
                    message=e.message,
                    headers=e.headers,
                )
            data = await response.json(loads=ujson.loads, content_type=None)

        if response_model is None:
            return data
        return response_model.model_validate(data)
