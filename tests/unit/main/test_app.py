from __future__ import annotations

import pytest

from src.main import app as module_app
from src.main.app import create_app


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app()
    assert app.title == "Semetric Charts"

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None
        assert app.state.container is not None

    # Ensure module-level app is instantiated
    assert isinstance(module_app.app, type(app))


def test_create_app_registers_chart_and_system_routes() -> None:
    app = create_app()
    paths = {route.path for route in app.routes}

    assert {"/charts/data", "/charts/layout", "/health", "/info"} <= paths
