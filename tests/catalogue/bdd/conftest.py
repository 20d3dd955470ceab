"""Shared BDD fixtures for the Catalogue domain."""

import pytest


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def catalogue_ids():
    """Maps product and category names used in scenarios to their ids."""
    return {}
