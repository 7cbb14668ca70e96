import logging

from creaturecup.simulation.cli import main
from creaturecup.utils import configure_logging


def test_package_logger_is_silent_until_configured(package_logger):
    assert [type(h) for h in package_logger.handlers] == [logging.NullHandler]
    assert package_logger.level == logging.NOTSET


def test_configure_logging_adds_one_stream_handler(package_logger):
    configure_logging(logging.DEBUG)
    configure_logging(logging.WARNING)

    streams = [h for h in package_logger.handlers if type(h) is logging.StreamHandler]
    assert len(streams) == 1
    assert package_logger.level == logging.WARNING


def test_cli_verbose_flag_enables_debug(package_logger, capsys):
    assert main(["a", "b", "--strategy", "lexical", "--verbose"]) == 0
    assert package_logger.level == logging.DEBUG
