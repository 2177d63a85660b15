"""Shared test fixtures for folio."""

import os
import tempfile
from datetime import date

import pytest

from folio.core.storage import LocalStorage
from folio.investments.local import LocalInvestmentRepository
from folio.investments.models import Investment, InvestmentFormData, InvestmentType


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config pointing at a local store with no latency."""
    import yaml

    config_data = {
        "paths": {"data_dir": os.path.join(tmp_dir, "data")},
        "storage": {
            "backend": "local",
            "path": os.path.join(tmp_dir, "storage"),
            "latency": 0,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(base_path=str(tmp_path / "store"))


@pytest.fixture
def local_repo(storage):
    """Empty local repository with no simulated latency."""
    return LocalInvestmentRepository(storage, latency=0, seed=[])


@pytest.fixture
def fund_form():
    return InvestmentFormData(name="Fund A", type=InvestmentType.FUND, amount=1000, date=date(2024, 1, 1))


@pytest.fixture
def make_investment():
    """Factory for Investment records with sensible defaults."""

    def _make(id="1", name="Fund A", type=InvestmentType.FUND, amount=1000, day=date(2024, 1, 1)):
        return Investment(id=id, name=name, type=type, amount=amount, date=day)

    return _make
