"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

import logging

from personledger import ContractSettings, LocalWorldState, PersonContract

TEST_LOGGER = "personledger.tests"


@pytest.fixture
def settings():
    """Settings pinned to defaults, independent of the environment."""
    return ContractSettings(
        _env_file=None,
        logger_name=TEST_LOGGER,
        log_level="DEBUG",
        allow_negative_ids=False,
    )


@pytest.fixture
def contract(settings):
    """Contract with its logger injected once."""
    return PersonContract(settings=settings, logger=logging.getLogger(TEST_LOGGER))


@pytest.fixture
def state():
    """Fresh in-memory world state."""
    return LocalWorldState()


@pytest.fixture
def populated(contract, state):
    """World state holding A (employed), B (employed, married), C (unemployed)."""
    contract.create(state, "Alice", 30, "passport", 1, "1 First St")
    contract.create(state, "Bob", 41, "license", 2, "2 Second St")
    contract.create(state, "Carol", 25, "passport", 3, "3 Third St")
    contract.update(state, 1, 30, "1 First St", True, False)
    contract.update(state, 2, 41, "2 Second St", True, True)
    return state
