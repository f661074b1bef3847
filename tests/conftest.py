"""Shared fixtures for the member design tests."""

import pytest

from civilsuite.codes.is456 import IS456
from civilsuite.materials import get_material_table
from civilsuite.models.inputs import BeamParameters


@pytest.fixture(scope="session")
def code():
    return IS456()


@pytest.fixture(scope="session")
def materials():
    return get_material_table()


@pytest.fixture
def reference_beam():
    """6 m simply supported 230 x 450 beam, 20 kN/m, M25 / Fe500."""
    return BeamParameters(span=6.0, udl=20.0, width=230, depth=450)
