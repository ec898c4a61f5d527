"""
config.py: Runtime configuration for the tail command.

Configuration is a plain dict with upper-case keys. Values come from, in
increasing priority:
  1. DEFAULTS
  2. Environment variables (TAILKIT_LOG_LEVEL, TAILKIT_CHUNK_SIZE)
  3. Command-line arguments (--debug, --quiet)
"""

import logging
import os

from .session import CHUNK_SIZE

ENV_PREFIX = "TAILKIT_"

DEFAULTS = {
    'LOG_LEVEL': 'ERROR',
    'CHUNK_SIZE': CHUNK_SIZE,
    'QUIET': False,
}


def _parse_chunk_size(raw) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid chunk size: {raw!r}")
    if value <= 0:
        raise ValueError(f"Invalid chunk size: {raw!r} (must be positive)")
    return value


def load_config(args=None, environ=None) -> dict:
    """
    Build the configuration dict.

    Args:
        args: argparse.Namespace from the command line (optional)
        environ: Mapping used instead of os.environ (optional, for tests)

    Returns:
        Dictionary with LOG_LEVEL, CHUNK_SIZE and QUIET

    Raises:
        ValueError: If TAILKIT_CHUNK_SIZE is not a positive integer
    """
    environ = os.environ if environ is None else environ
    config = dict(DEFAULTS)

    if environ.get(ENV_PREFIX + 'LOG_LEVEL'):
        config['LOG_LEVEL'] = environ[ENV_PREFIX + 'LOG_LEVEL'].upper()
    if environ.get(ENV_PREFIX + 'CHUNK_SIZE'):
        config['CHUNK_SIZE'] = _parse_chunk_size(environ[ENV_PREFIX + 'CHUNK_SIZE'])

    if args is not None:
        if getattr(args, 'debug', False):
            config['LOG_LEVEL'] = 'DEBUG'
        if getattr(args, 'quiet', False):
            config['QUIET'] = True

    logging.debug(f"Configuration: {config}")
    return config
