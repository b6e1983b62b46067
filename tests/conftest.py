import importlib
import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tests.db_utils import create_backoffice_tables


def _setup_app(database_url: str):
    os.environ["DATABASE_URL"] = database_url

    import app.safari.core.config as config
    import app.safari.db.session as session
    import app.main as main

    importlib.reload(config)
    importlib.reload(session)
    importlib.reload(main)

    return main.create_app(), session


@pytest.fixture()
def client(tmp_path: Path):
    database_url = f"sqlite+pysqlite:///{tmp_path / 'test.db'}"
    app, session = _setup_app(database_url)
    create_backoffice_tables(session.engine)

    with TestClient(app) as client:
        yield client

    session.engine.dispose()


@pytest.fixture()
def db_engine(client):
    return client.app.state.db_engine
