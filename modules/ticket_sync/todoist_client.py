"""
Todoist API client for Ticket Sync.

Talks to the Sync API only: a full sync fills the local mirror, and
queued commands are pushed back with commit().
"""

import json
import logging
from typing import Optional

import httpx

from .config import Config
from .exceptions import TodoistAPIError, TodoistCommitError
from .mirror import TodoistMirror
from .models import TodoistItem, TodoistProject

logger = logging.getLogger(__name__)


class TodoistClient:
    """Todoist Sync API client backed by an in-memory mirror."""

    SYNC_URL = 'https://api.todoist.com/api/v1/sync'
    RESOURCE_TYPES = ['projects', 'items']

    def __init__(
        self,
        api_token: str,
        timeout: int = 30,
        transport: Optional[httpx.BaseTransport] = None,
        mirror: Optional[TodoistMirror] = None,
    ):
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport
        self.mirror = mirror if mirror is not None else TodoistMirror()

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> 'TodoistClient':
        return cls(config.todoist_api_key, **kwargs)

    def _get_headers(self) -> dict:
        """Get request headers."""
        return {'Authorization': f'Bearer {self.api_token}'}

    def _sync_request(self, sync_token: str, commands: Optional[list] = None) -> dict:
        """Make a Sync API request."""
        data = {
            'sync_token': sync_token,
            'resource_types': json.dumps(self.RESOURCE_TYPES),
        }
        if commands:
            data['commands'] = json.dumps(commands)

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.SYNC_URL, headers=self._get_headers(), data=data)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise TodoistAPIError(f"Todoist sync failed: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise TodoistAPIError(f"Todoist sync failed: {e}") from e
        except ValueError as e:
            raise TodoistAPIError("Todoist sync returned invalid JSON") from e

    # ==========================================================================
    # Sync
    # ==========================================================================

    def full_sync(self):
        """Pull the complete account state into the mirror."""
        self.mirror.reset()
        data = self._sync_request('*')
        try:
            data.setdefault('full_sync', True)
            self.mirror.apply_sync(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise TodoistAPIError(f"Unexpected sync payload: {e!r}") from e

        logger.info(
            f"Synced {len(self.mirror.projects)} projects and {len(self.mirror.items)} items"
        )

    def commit(self):
        """Push queued commands and merge the resulting changes."""
        commands = list(self.mirror.pending_commands)
        if not commands:
            logger.debug("Nothing to commit")
            return

        data = self._sync_request(self.mirror.sync_token, commands)

        try:
            statuses = data.get('sync_status', {})
            failures = {
                cmd['uuid']: statuses.get(cmd['uuid'], 'missing')
                for cmd in commands
                if statuses.get(cmd['uuid']) != 'ok'
            }
        except (KeyError, TypeError, AttributeError) as e:
            raise TodoistAPIError(f"Unexpected commit payload: {e!r}") from e
        if failures:
            raise TodoistCommitError(failures)

        self.mirror.pending_commands.clear()
        try:
            self.mirror.apply_temp_ids(data.get('temp_id_mapping', {}))
            self.mirror.apply_sync(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise TodoistAPIError(f"Unexpected commit payload: {e!r}") from e
        logger.info(f"Committed {len(commands)} command(s) to Todoist")

    # ==========================================================================
    # Mirror access
    # ==========================================================================

    def find_project_by_name(self, name: str) -> Optional[TodoistProject]:
        return self.mirror.find_project_by_name(name)

    def find_items_by_content(self, content: str) -> list[TodoistItem]:
        return self.mirror.find_items_by_content(content)

    def find_items_by_project_ids(self, project_ids: list[str]) -> list[TodoistItem]:
        return self.mirror.find_items_by_project_ids(project_ids)

    def add_item(self, content: str, project_id: str) -> TodoistItem:
        return self.mirror.add_item(content, project_id)

    def close_item(self, item_id: str) -> TodoistItem:
        return self.mirror.close_item(item_id)
