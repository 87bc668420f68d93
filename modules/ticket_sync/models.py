"""
Data models for Ticket Sync module.

Freshdesk agents/tickets and the Todoist objects they are mirrored into.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class TicketStatus(IntEnum):
    """Freshdesk ticket status codes."""
    OPEN = 2
    PENDING = 3
    RESOLVED = 4
    CLOSED = 5


# Statuses that mean the agent no longer needs a reminder
DONE_STATUSES = frozenset({TicketStatus.PENDING, TicketStatus.RESOLVED, TicketStatus.CLOSED})


@dataclass(frozen=True)
class Agent:
    """Authenticated Freshdesk agent."""
    id: int
    name: str
    email: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> 'Agent':
        """Create from Freshdesk API response."""
        contact = data.get('contact') or {}
        return cls(
            id=data['id'],
            name=contact.get('name', ''),
            email=contact.get('email'),
        )


@dataclass
class Ticket:
    """Ticket from Freshdesk."""
    id: int
    subject: str
    status: int
    responder_id: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> 'Ticket':
        """Create from Freshdesk API response."""
        return cls(
            id=data['id'],
            subject=data.get('subject') or '',
            status=data['status'],
            responder_id=data.get('responder_id'),
        )

    @property
    def is_done(self) -> bool:
        return self.status in DONE_STATUSES


@dataclass
class TodoistProject:
    """Project from the Todoist Sync API."""
    id: str
    name: str
    is_deleted: bool = False
    is_archived: bool = False

    @classmethod
    def from_api(cls, data: dict) -> 'TodoistProject':
        """Create from Todoist API response."""
        return cls(
            id=str(data['id']),
            name=data['name'],
            is_deleted=bool(data.get('is_deleted', False)),
            is_archived=bool(data.get('is_archived', False)),
        )


@dataclass
class TodoistItem:
    """Item (task) from the Todoist Sync API."""
    id: str
    content: str
    project_id: Optional[str] = None
    checked: bool = False
    is_deleted: bool = False

    @classmethod
    def from_api(cls, data: dict) -> 'TodoistItem':
        """Create from Todoist API response."""
        return cls(
            id=str(data['id']),
            content=data['content'],
            project_id=str(data['project_id']) if data.get('project_id') else None,
            checked=bool(data.get('checked', False)),
            is_deleted=bool(data.get('is_deleted', False)),
        )

    @property
    def is_active(self) -> bool:
        return not (self.checked or self.is_deleted)
