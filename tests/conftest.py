"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def sample_pairs():
    """Sample (prerequisite, dependent) pairs for testing."""
    return [
        ("C", "A"),
        ("C", "F"),
        ("A", "B"),
        ("A", "D"),
        ("B", "E"),
        ("D", "E"),
        ("F", "E"),
    ]


@pytest.fixture
def wide_pairs():
    """A wider graph with several independent chains."""
    return [
        ("A", "D"),
        ("B", "D"),
        ("C", "E"),
        ("D", "G"),
        ("E", "G"),
        ("F", "H"),
        ("G", "I"),
        ("H", "I"),
        ("J", "K"),
    ]
