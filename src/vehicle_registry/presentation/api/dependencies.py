"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from ...infrastructure.services import ServiceFactory


def get_service_factory(request: Request) -> ServiceFactory:
    """Return the service factory attached to the running application."""
    return request.app.state.service_factory
