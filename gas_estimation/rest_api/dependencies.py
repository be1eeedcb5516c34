import fastapi
from pydantic import BaseModel, ConfigDict

from gas_estimation.services.gas_service import GasService


class Dependencies(BaseModel):
    """
    Holds the dependencies that should exist for the lifetime of the application.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True, extra='forbid', frozen=True
    )

    gas_service: GasService

    def register(self, app: fastapi.FastAPI):
        """
        Registers itself in the application.
        """
        app.state.dependencies = self


def gas_service(request: fastapi.Request) -> GasService:
    return request.app.state.dependencies.gas_service
