"""FastAPI dependencies that hand routes the application's services."""

from typing import Annotated

from fastapi import Depends, Request

from securenotes.services.container import Services


def get_services(request: Request) -> Services:
    """Dependency: the Services built for this app in create_app()."""
    return request.app.state.services


ServicesDep = Annotated[Services, Depends(get_services)]
