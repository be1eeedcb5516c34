from typing import Optional

from fastapi import Depends, Query
from fastapi.routing import APIRouter

from gas_estimation.models.gas_models import GasPriceResponse
from gas_estimation.rest_api import dependencies
from gas_estimation.utils.errors import responses

gas_routes = APIRouter()


@gas_routes.get('', response_model=GasPriceResponse, responses=responses)
@gas_routes.get('/', include_in_schema=False)
async def get_gas_price(
    gas_limit: Optional[float] = Query(None, gt=0, description='Gas used by the transaction'),
    time_limit: Optional[float] = Query(None, gt=0, description='Seconds to get the transaction mined within'),
    bump: Optional[float] = Query(None, gt=0, description='Factor to scale the estimated price by'),
    max_price: Optional[int] = Query(None, ge=0, description='Maximum price per unit of gas, wei'),
    gas_service: dependencies.GasService = Depends(dependencies.gas_service),
) -> GasPriceResponse:
    """
    Returns the gas price from the first available source in priority order.
    Returned object has not null eip1559 field if the source supports it.
    """
    return await gas_service.get_gas_price_response(
        gas_limit=gas_limit,
        time_limit=time_limit,
        bump=bump,
        max_price=max_price,
    )


@gas_routes.get('/sources', response_model=list[str])
async def get_sources(
    gas_service: dependencies.GasService = Depends(dependencies.gas_service),
) -> list[str]:
    """Returns names of the gas price sources in order of priority."""
    return gas_service.sources
