# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample datasets, schemas and a mocked OpenAI client
# =============================================================================

import json
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LLM_SUMMARY_ENABLED", "false")

from unittest.mock import MagicMock

import numpy as np
import pytest

from cleaning_actions import ActionContext, ActionDescriptor, get_operator, parse_schema


# =============================================================================
# Helpers
# =============================================================================

def run_operator(rows, action: dict, schema: dict | None = None, seed: int | None = 0):
    """Call one registered operator directly, bypassing the engine's error capture."""
    descriptor = ActionDescriptor.model_validate(action)
    spec = get_operator(descriptor.type)
    assert spec is not None, f"{descriptor.type} is not registered"
    context = ActionContext(schema=parse_schema(schema), rng=np.random.default_rng(seed))
    return spec.func(rows, descriptor, context)


def make_completion(payload) -> MagicMock:
    """Fake chat.completions.create() return value carrying a JSON payload."""
    content = payload if isinstance(payload, str) else json.dumps(payload)
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def run():
    """The run_operator helper, as a fixture."""
    return run_operator


@pytest.fixture
def people():
    """Small dataset with the usual problems: blanks, bad types, duplicates."""
    return [
        {"id": 1, "name": " alice ", "age": 30, "city": "Paris", "joined": "2024/01/05"},
        {"id": 2, "name": "BOB", "age": None, "city": "", "joined": "2023/12/31"},
        {"id": 3, "name": "carol", "age": "abc", "city": "Lyon", "joined": "2022/07/14"},
        {"id": 4, "name": "dave", "age": 40, "city": "Paris", "joined": "2021/02/28"},
        {"id": 5, "name": "BOB", "age": -5, "city": "Nice", "joined": "not a date"},
    ]


@pytest.fixture
def people_schema():
    """Schema for the people dataset (camelCase, as sent by the client)."""
    return {
        "id": {"dataType": "Integer", "unique": True},
        "name": {"dataType": "String"},
        "age": {"dataType": "Integer", "numericSign": "positive"},
        "city": {"dataType": "String"},
        "joined": {"dataType": "Date", "format": "YYYY/MM/DD", "separator": "/"},
    }


@pytest.fixture
def mock_openai():
    """OpenAI client whose chat.completions.create() is a MagicMock."""
    return MagicMock()
