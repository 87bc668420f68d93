"""
Configuration management for Ticket Sync module.

Loads environment variables and provides typed config access.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from dotenv import load_dotenv

# Find project root and load .env
PROJECT_ROOT = Path(__file__).parent.parent.parent
load_dotenv(PROJECT_ROOT / '.env')


@dataclass(frozen=True)
class Config:
    """Ticket sync configuration."""

    # Freshdesk
    freshdesk_domain: str = ''
    freshdesk_api_key: str = ''
    freshdesk_custom_domain: str = ''

    # Todoist
    todoist_api_key: str = ''
    todoist_list: str = ''

    # Logging (set TICKET_SYNC_LOG_LEVEL=DEBUG for verbose output)
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'Config':
        """
        Build config from environment variables.

        Keyword overrides (typically command-line flags) win over the
        environment when they are not None.
        """
        env = os.environ if environ is None else environ

        values = {
            'freshdesk_domain': env.get('FRESHDESK_DOMAIN', ''),
            'freshdesk_api_key': env.get('FRESHDESK_APIKEY', ''),
            'freshdesk_custom_domain': env.get('FRESHDESK_CUSTOM_DOMAIN', ''),
            'todoist_api_key': env.get('TODOIST_APIKEY', ''),
            'todoist_list': env.get('TODOIST_FRESHDESK_LIST', ''),
            'log_level': env.get('TICKET_SYNC_LOG_LEVEL', 'INFO'),
        }
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown config option: {key}")
            if value is not None:
                values[key] = value

        return cls(**values)

    @property
    def freshdesk_base_url(self) -> str:
        return f"https://{self.freshdesk_domain}.freshdesk.com/api/v2"

    @property
    def link_domain(self) -> str:
        """Domain used for ticket links in task content."""
        if self.freshdesk_custom_domain:
            return self.freshdesk_custom_domain
        return f"{self.freshdesk_domain}.freshdesk.com"

    def validate(self) -> list[str]:
        """Validate required configuration. Returns list of errors."""
        errors = []

        if not self.freshdesk_domain:
            errors.append("FRESHDESK_DOMAIN (--fd-domain) is required")

        if not self.freshdesk_api_key:
            errors.append("FRESHDESK_APIKEY (--fd-apikey) is required")

        if not self.todoist_api_key:
            errors.append("TODOIST_APIKEY (--todoist-apikey) is required")

        if not self.todoist_list:
            errors.append("TODOIST_FRESHDESK_LIST (--todoist-freshdesk-list) is required")

        if self.log_level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"Invalid log level: {self.log_level}")

        return errors
