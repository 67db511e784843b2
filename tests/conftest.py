"""
Shared fixtures for condsens tests.
"""

import json

import pytest

from condsens.doe import parse_params
from condsens.utils import DEFAULT_PARAMS


@pytest.fixture
def default_specs():
    """Normalised specs of the built-in parameter set, in model order."""
    names, specs = parse_params(DEFAULT_PARAMS)
    return names, specs


@pytest.fixture
def params_json(tmp_path):
    """Built-in parameter set written to a JSON file."""
    path = tmp_path / "params.json"
    path.write_text(json.dumps(DEFAULT_PARAMS), encoding="utf-8")
    return path
