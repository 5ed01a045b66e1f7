"""Shared pytest fixtures for all tests."""
import pytest
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's CRUDGEN_CONFIG or config/crudgen.yaml out of tests."""
    monkeypatch.delenv("CRUDGEN_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(scope="session")
def orders_fixture():
    """Table description and expected package text for ORDERS."""
    base = FIXTURES_DIR / "orders"
    return {
        "description": (base / "orders.tbl").read_text(encoding="utf-8"),
        "spec": (base / "orders_spec.sql").read_text(encoding="utf-8"),
        "body": (base / "orders_body.sql").read_text(encoding="utf-8"),
    }


@pytest.fixture
def orders_description(orders_fixture):
    return orders_fixture["description"]
