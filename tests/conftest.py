"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from openapi_review.models import DiffOutcome, SpecDocument
from tests.helpers import PETSTORE_DOCS, diff_at, petstore_spec

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_docs() -> str:
    return PETSTORE_DOCS


@pytest.fixture
def base_spec() -> SpecDocument:
    return SpecDocument(spec=petstore_spec("1.0.0"), content="", location="base/petstore.yaml", format="openapi3")


@pytest.fixture
def head_spec() -> SpecDocument:
    return SpecDocument(spec=petstore_spec("1.1.0"), content="", location="head/petstore.yaml", format="openapi3")


@pytest.fixture
def breaking_outcome() -> DiffOutcome:
    """One breaking change under createPet (POST /pets)."""
    return DiffOutcome.model_validate(
        {
            "breakingDifferencesFound": True,
            "breakingDifferences": [diff_at("paths./pets.post.requestBody")],
        }
    )


@pytest.fixture
def non_breaking_outcome() -> DiffOutcome:
    """One non-breaking change under listPets (GET /pets)."""
    return DiffOutcome.model_validate(
        {
            "breakingDifferencesFound": False,
            "nonBreakingDifferences": [diff_at("paths./pets.get.responses.200")],
        }
    )
