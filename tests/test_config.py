import logging

from sfwkt.config import LOG_LEVEL, PYDANTIC_CONFIG, WKT_NESTING_MAX_DEPTH, WKT_PARSE_MAX_SIZE


def test_codec_limits():
    assert WKT_PARSE_MAX_SIZE > 0
    assert WKT_NESTING_MAX_DEPTH > 0


def test_log_level_resolved():
    assert LOG_LEVEL in {'DEBUG', 'INFO', 'WARNING'}


def test_pydantic_config_allows_geometry_types():
    assert PYDANTIC_CONFIG['arbitrary_types_allowed']


def test_logging_scoped_to_package():
    logger = logging.getLogger('sfwkt')
    assert not logger.propagate
    assert logger.level == logging.getLevelName(LOG_LEVEL)
