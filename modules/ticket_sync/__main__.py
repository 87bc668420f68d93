"""
Ticket Sync CLI entry point.

Usage:
    python -m modules.ticket_sync [--fd-domain DOMAIN] [--fd-apikey KEY]
                                  [--todoist-apikey KEY]
                                  [--todoist-freshdesk-list NAME]
                                  [--fd-custom-domain DOMAIN]
                                  [--log-level LEVEL]

Every flag falls back to its environment variable (see config.py).
"""

import argparse
import logging
import sys

from .config import Config
from .exceptions import ConfigError, TicketSyncError
from .freshdesk_client import FreshdeskClient
from .sync_engine import SyncEngine
from .todoist_client import TodoistClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Ticket Sync - Freshdesk → Todoist',
    )
    parser.add_argument('--fd-domain', dest='freshdesk_domain',
                        help='____.freshdesk.com -- the domain for your support portal')
    parser.add_argument('--fd-apikey', dest='freshdesk_api_key',
                        help="The API key provided on your Freshdesk 'Profile Settings' page")
    parser.add_argument('--todoist-apikey', dest='todoist_api_key',
                        help='Your Todoist API key')
    parser.add_argument('--todoist-freshdesk-list', dest='todoist_list',
                        help='The list to which Freshdesk tickets should be added')
    parser.add_argument('--fd-custom-domain', dest='freshdesk_custom_domain',
                        help='A custom domain to use for ticket links in tasks. '
                             'You need to set this if your Freshdesk is using a custom domain.')
    parser.add_argument('--log-level', dest='log_level',
                        help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    return parser


def load_config(argv=None) -> Config:
    args = build_parser().parse_args(argv)
    config = Config.from_env(**vars(args))

    errors = config.validate()
    if errors:
        raise ConfigError('; '.join(errors))
    return config


def main(argv=None) -> int:
    try:
        config = load_config(argv)
    except ConfigError as e:
        logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        logger.error(f"Configuration error: {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    engine = SyncEngine(
        config,
        FreshdeskClient.from_config(config),
        TodoistClient.from_config(config),
    )

    try:
        engine.run()
    except TicketSyncError as e:
        logger.error(f"Sync failed: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
