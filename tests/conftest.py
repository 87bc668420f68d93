"""
pytest configuration and fixtures for Ticket Sync tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.ticket_sync.config import Config
from modules.ticket_sync.exceptions import FreshdeskAPIError
from modules.ticket_sync.mirror import TodoistMirror
from modules.ticket_sync.models import Agent, Ticket, TicketStatus, TodoistProject


AGENT_ID = 1001
OTHER_AGENT_ID = 2002


class FakeFreshdesk:
    """In-memory stand-in for FreshdeskClient."""

    def __init__(self, agent: Agent, tickets: list[Ticket], lookup_error: Exception = None):
        self.agent = agent
        self.tickets = {t.id: t for t in tickets}
        self.lookup_error = lookup_error
        self.queries = []
        self.lookups = []

    def get_current_agent(self) -> Agent:
        return self.agent

    def search_tickets(self, query):
        self.queries.append(str(query))
        return [
            t for t in self.tickets.values()
            if t.status == TicketStatus.OPEN and t.responder_id == self.agent.id
        ]

    def get_ticket(self, ticket_id: int) -> Ticket:
        self.lookups.append(ticket_id)
        if self.lookup_error is not None:
            raise self.lookup_error
        if ticket_id not in self.tickets:
            raise FreshdeskAPIError(f"Ticket {ticket_id} not found", status_code=404)
        return self.tickets[ticket_id]


class FakeTodoist:
    """TodoistClient stand-in backed by a real mirror; commit resolves temp ids."""

    def __init__(self, projects=(), items=()):
        self.mirror = TodoistMirror()
        self._projects = list(projects)
        self._items = list(items)
        self.commits = 0
        self.committed_commands = []
        self._next_id = 9000

    def full_sync(self):
        self.mirror.reset()
        self.mirror.apply_sync({
            'full_sync': True,
            'sync_token': 'token-0',
            'projects': self._projects,
            'items': self._items,
        })

    def commit(self):
        self.commits += 1
        mapping = {}
        for cmd in self.mirror.pending_commands:
            if cmd['type'] == 'item_add':
                self._next_id += 1
                mapping[cmd['temp_id']] = str(self._next_id)
        self.committed_commands.extend(self.mirror.pending_commands)
        self.mirror.pending_commands.clear()
        self.mirror.apply_temp_ids(mapping)

    def find_project_by_name(self, name):
        return self.mirror.find_project_by_name(name)

    def find_items_by_content(self, content):
        return self.mirror.find_items_by_content(content)

    def find_items_by_project_ids(self, project_ids):
        return self.mirror.find_items_by_project_ids(project_ids)

    def add_item(self, content, project_id):
        return self.mirror.add_item(content, project_id)

    def close_item(self, item_id):
        return self.mirror.close_item(item_id)


@pytest.fixture
def config():
    """Complete test configuration."""
    return Config(
        freshdesk_domain='acme',
        freshdesk_api_key='fd_test_key',
        freshdesk_custom_domain='support.example.com',
        todoist_api_key='td_test_key',
        todoist_list='Freshdesk',
    )


@pytest.fixture
def agent():
    return Agent(id=AGENT_ID, name='Pat Agent', email='pat@example.com')


@pytest.fixture
def project():
    return TodoistProject(id='proj-1', name='Freshdesk')


@pytest.fixture
def make_ticket():
    def _make(ticket_id, subject='Printer on fire', status=TicketStatus.OPEN, responder_id=AGENT_ID):
        return Ticket(id=ticket_id, subject=subject, status=status, responder_id=responder_id)
    return _make


@pytest.fixture
def env_vars(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("FRESHDESK_DOMAIN", "acme")
    monkeypatch.setenv("FRESHDESK_APIKEY", "fd_env_key")
    monkeypatch.setenv("TODOIST_APIKEY", "td_env_key")
    monkeypatch.setenv("TODOIST_FRESHDESK_LIST", "Freshdesk")
    monkeypatch.delenv("FRESHDESK_CUSTOM_DOMAIN", raising=False)
    monkeypatch.delenv("TICKET_SYNC_LOG_LEVEL", raising=False)
