"""FastAPI dependencies resolving the services attached to the running application."""

from fastapi import Request

from event_blog.services import Services


def get_services(request: Request) -> Services:
    return request.app.state.services
