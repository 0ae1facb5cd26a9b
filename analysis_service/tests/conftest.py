"""Fixtures compartidas de la suite."""

import pytest
from fastapi.testclient import TestClient

from rustfront.infrastructure.lark_parser import get_parser
from rustfront.main import app


@pytest.fixture(scope="session")
def parser():
    return get_parser()


@pytest.fixture
def hello_world():
    return 'fn main() { println!("Hello, world!"); }'


@pytest.fixture
def client():
    return TestClient(app)
