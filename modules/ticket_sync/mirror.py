"""
In-memory mirror of Todoist state.

Rebuilt from a full sync on every run. All lookups are plain scans over
the mirror; mutations are applied locally and queued as Sync API
commands until the next commit.
"""

import logging
import uuid
from typing import Iterable, Optional

from .exceptions import TodoistStateError
from .models import TodoistItem, TodoistProject

logger = logging.getLogger(__name__)


class TodoistMirror:
    """Local copy of Todoist projects and items plus pending commands."""

    def __init__(self):
        self.sync_token = '*'
        self.projects: dict[str, TodoistProject] = {}
        self.items: dict[str, TodoistItem] = {}
        self.pending_commands: list[dict] = []

    # ==========================================================================
    # Loading
    # ==========================================================================

    def reset(self):
        """Drop all state, including queued commands."""
        self.sync_token = '*'
        self.projects.clear()
        self.items.clear()
        self.pending_commands.clear()

    def apply_sync(self, data: dict):
        """
        Merge a Sync API response into the mirror.

        A full sync response replaces everything; incremental responses
        upsert the returned objects and drop deleted ones.
        """
        if data.get('full_sync'):
            self.projects.clear()
            self.items.clear()

        for raw in data.get('projects', []):
            project = TodoistProject.from_api(raw)
            if project.is_deleted:
                self.projects.pop(project.id, None)
            else:
                self.projects[project.id] = project

        for raw in data.get('items', []):
            item = TodoistItem.from_api(raw)
            if item.is_deleted:
                self.items.pop(item.id, None)
            else:
                self.items[item.id] = item

        if data.get('sync_token'):
            self.sync_token = data['sync_token']

    def apply_temp_ids(self, mapping: dict):
        """Replace temporary ids with the ids assigned by Todoist."""
        for temp_id, real_id in mapping.items():
            real_id = str(real_id)
            item = self.items.pop(temp_id, None)
            if item is not None:
                item.id = real_id
                self.items[real_id] = item
            project = self.projects.pop(temp_id, None)
            if project is not None:
                project.id = real_id
                self.projects[real_id] = project

            for item in self.items.values():
                if item.project_id == temp_id:
                    item.project_id = real_id

    # ==========================================================================
    # Lookups
    # ==========================================================================

    def find_project_by_name(self, name: str) -> Optional[TodoistProject]:
        """Exact, case-sensitive match on an active project."""
        for project in self.projects.values():
            if project.name == name and not project.is_archived:
                return project
        return None

    def find_items_by_content(self, content: str) -> list[TodoistItem]:
        return [item for item in self.items.values() if item.content == content]

    def find_items_by_project_ids(self, project_ids: Iterable[str]) -> list[TodoistItem]:
        """Open items filed under any of the given projects."""
        wanted = set(project_ids)
        return [
            item for item in self.items.values()
            if item.project_id in wanted and item.is_active
        ]

    # ==========================================================================
    # Mutations
    # ==========================================================================

    def add_item(self, content: str, project_id: str) -> TodoistItem:
        """Create an item locally and queue an item_add command."""
        temp_id = str(uuid.uuid4())
        item = TodoistItem(id=temp_id, content=content, project_id=project_id)
        self.items[temp_id] = item

        self.pending_commands.append({
            'type': 'item_add',
            'temp_id': temp_id,
            'uuid': str(uuid.uuid4()),
            'args': {'content': content, 'project_id': project_id},
        })
        logger.debug(f"Queued item_add {temp_id}: {content}")
        return item

    def close_item(self, item_id: str) -> TodoistItem:
        """Mark an item checked locally and queue an item_close command."""
        item = self.items.get(item_id)
        if item is None:
            raise TodoistStateError(f"Item {item_id} is not in the local Todoist mirror")

        item.checked = True
        self.pending_commands.append({
            'type': 'item_close',
            'uuid': str(uuid.uuid4()),
            'args': {'id': item_id},
        })
        logger.debug(f"Queued item_close {item_id}")
        return item
