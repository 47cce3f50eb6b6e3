import os

os.environ.setdefault("LOG_DISABLE_FILE", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from graphql import GraphQLSchema

from src.models.graphql import ProjectInfo
from tests.factories import build_test_schema


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_test_schema()


@pytest.fixture
def project() -> ProjectInfo:
    return ProjectInfo(id="proj-1", client_id="client-1", name="demo")
