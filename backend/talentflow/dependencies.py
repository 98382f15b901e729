from fastapi import Request

from talentflow.config import Settings
from talentflow.services.simulator import RequestSimulator
from talentflow.services.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_simulator(request: Request) -> RequestSimulator:
    return request.app.state.simulator


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
