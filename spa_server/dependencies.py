"""Request dependencies exposing the per-application configuration."""

from fastapi import Request

from spa_server.config import Settings
from spa_server.resolver import Resolver


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_resolver(request: Request) -> Resolver:
    return request.app.state.resolver
