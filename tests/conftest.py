"""
Shared fixtures for the TPS scoring test suite.
"""

import pytest

from tps_scoring.domain.value_objects import QUESTION_COUNT, TRAITS
from tps_scoring.infrastructure.database import DatabaseManager


# ============================================================================
# RESPONSES AND TRAIT SCORES
# ============================================================================

@pytest.fixture
def alternating_responses():
    """108 answers alternating 3, 8, 3, 8, ..."""
    return [3 if i % 2 == 0 else 8 for i in range(QUESTION_COUNT)]


@pytest.fixture
def neutral_responses():
    return [5] * QUESTION_COUNT


@pytest.fixture
def neutral_traits():
    """Every trait sitting on the neutral score"""
    return {trait: 5.0 for trait in TRAITS}


# ============================================================================
# DATABASE
# ============================================================================

@pytest.fixture
async def db_manager(tmp_path):
    """File-backed SQLite database with all tables created"""
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'tps_test.db'}")
    await manager.initialize()
    await manager.create_tables()
    yield manager
    await manager.close()
