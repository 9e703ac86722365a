import pytest
from fastapi.testclient import TestClient

from typology.assessments.mbti.catalog import get_parameters, reset_catalog
from typology.assessments.mbti.types import Response
from typology.core.config import get_settings
from typology.main import app


@pytest.fixture(autouse=True)
def _fresh_catalog():
    # settings overrides in a test must not leak a cached instrument into the next
    yield
    get_settings.cache_clear()
    reset_catalog()


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def params():
    return get_parameters()


@pytest.fixture()
def all_true(params):
    return [Response(question_index=idx, value=True) for idx in range(params.question_count)]
