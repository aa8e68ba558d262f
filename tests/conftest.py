"""
Shared fixtures: settings pointed at temporary data files.
"""

import json

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from core.service_factory import build_services

STORIES = [
    {"id": "malin-kundang", "title": "Malin Kundang", "region": "Sumatera Barat"},
    {"id": "timun-mas", "title": "Timun Mas", "region": "Jawa Tengah"},
    {"id": "sangkuriang", "title": "Sangkuriang", "region": "Jawa Barat"},
]


@pytest.fixture()
def settings(tmp_path) -> Settings:
    stories_path = tmp_path / "stories.json"
    stories_path.write_text(json.dumps(STORIES), encoding="utf-8")
    return Settings(
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        users_db_path=str(tmp_path / "users.json"),
        stories_db_path=str(stories_path),
    )


@pytest.fixture()
def services(settings):
    return build_services(settings)


@pytest.fixture()
def client(settings):
    from main import create_app

    with TestClient(create_app(settings)) as c:
        yield c
