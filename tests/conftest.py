"""
Pytest configuration and fixtures for Left OverCook tests.
"""

import os

import pytest
from unittest.mock import MagicMock

# Set test environment before importing overcook modules
os.environ["OVERCOOK_ENV"] = "development"
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.maybe_single.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def sample_recipe_data():
    """One recipe as the LLM returns it (camelCase keys)."""
    return {
        "id": "r-1",
        "title": "Fried Rice",
        "description": "Day-old rice crisped in a hot pan",
        "cuisineType": "Asian",
        "prepTime": 20,
        "calories": 450,
        "ingredients": ["2 cups cooked rice", "1 chicken breast", "2 eggs"],
        "equipment": ["Stovetop"],
        "instructions": ["Heat oil", "Fry chicken", "Add rice and eggs"],
    }


@pytest.fixture
def sample_preference_row():
    """A stored user_preferences row."""
    return {
        "user_id": "user-1",
        "seasonings": ["Salt", "Cumin"],
        "custom_seasonings": ["Sumac"],
        "removed_seasonings": ["Paprika"],
        "equipment": ["Oven"],
        "custom_equipment": [],
        "removed_equipment": None,
        "cuisines": ["Thai"],
        "custom_cuisines": ["Ethiopian"],
        "removed_cuisines": [],
    }
