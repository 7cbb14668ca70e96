import logging

import pytest

from creaturecup.controllers.tournament import TournamentManager
from creaturecup.persistence import InMemoryTournamentRepository
from creaturecup.utils import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def package_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def repository():
    return InMemoryTournamentRepository()


@pytest.fixture
def manager(repository):
    return TournamentManager(repository)


@pytest.fixture
def sixteen():
    return [f"s{i:02d}" for i in range(1, 17)]
