"""
Sync Engine - Core reconciliation logic.

Handles:
- Creating Todoist items for open tickets assigned to the current agent
- Closing items whose ticket is done, reassigned or gone

Task content links back to its ticket with a leading "#<ticket id>:"
prefix. Creation dedup uses exact content equality, so a ticket whose
subject changes after its task was created gets a second task on the
next run.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from .config import Config
from .exceptions import FreshdeskAPIError, InvariantViolation, ProjectNotFoundError
from .freshdesk_client import FreshdeskClient
from .models import Agent, Ticket, TicketStatus, TodoistItem, TodoistProject
from .querybuilder import Parameter, all_of
from .todoist_client import TodoistClient

logger = logging.getLogger(__name__)

TICKET_ID_PATTERN = re.compile(r'^#[0-9]+')


def task_content(ticket: Ticket, link_domain: str) -> str:
    """Canonical Todoist content for a ticket."""
    return f"#{ticket.id}: [{ticket.subject}](https://{link_domain}/a/tickets/{ticket.id})"


def parse_ticket_id(content: str) -> Optional[int]:
    """Ticket ID encoded at the start of task content, or None."""
    match = TICKET_ID_PATTERN.match(content)
    if not match:
        return None

    try:
        return int(match.group(0)[1:])
    except ValueError as e:
        raise InvariantViolation(f"Could not convert ticket number in {content!r} to int") from e


def needs_closure(ticket: Optional[Ticket], agent_id: int) -> bool:
    """Whether the task for this ticket should be completed. None means the ticket is gone."""
    if ticket is None:
        return True
    return ticket.is_done or ticket.responder_id != agent_id


@dataclass
class SyncResult:
    """Summary of one run."""
    agent: Optional[Agent] = None
    project: Optional[TodoistProject] = None
    tickets: list[Ticket] = field(default_factory=list)
    created: list[TodoistItem] = field(default_factory=list)
    closed: list[TodoistItem] = field(default_factory=list)


class SyncEngine:
    """One-shot Freshdesk → Todoist reconciliation."""

    def __init__(self, config: Config, freshdesk: FreshdeskClient, todoist: TodoistClient):
        self.config = config
        self.freshdesk = freshdesk
        self.todoist = todoist

    # ==========================================================================
    # Freshdesk
    # ==========================================================================

    def resolve_agent(self) -> Agent:
        agent = self.freshdesk.get_current_agent()
        logger.info(f"Current agent: {agent.name} ({agent.id})")
        return agent

    def fetch_assigned_tickets(self, agent: Agent) -> list[Ticket]:
        """Open tickets assigned to the agent."""
        logger.info("Finding tickets for current agent")
        query = all_of(
            Parameter('agent_id').equals(agent.id),
            Parameter('status').equals(TicketStatus.OPEN),
        )
        tickets = self.freshdesk.search_tickets(query)
        logger.info(f"Found {len(tickets)} open tickets")
        return tickets

    # ==========================================================================
    # Todoist
    # ==========================================================================

    def resolve_project(self) -> TodoistProject:
        logger.info("Downloading todoist account data")
        self.todoist.full_sync()

        project = self.todoist.find_project_by_name(self.config.todoist_list)
        if project is None:
            raise ProjectNotFoundError(self.config.todoist_list)

        logger.info(f"Found target project {project.name} (id: {project.id})")
        return project

    def create_missing_tasks(self, tickets: list[Ticket], project: TodoistProject) -> list[TodoistItem]:
        """Queue a new item for every ticket without an identical task."""
        created = []

        for ticket in tickets:
            content = task_content(ticket, self.config.link_domain)
            if self.todoist.find_items_by_content(content):
                continue

            logger.info(f"Task not found for ticket {ticket.id}. Creating...")
            created.append(self.todoist.add_item(content, project.id))

        return created

    def close_stale_tasks(self, agent: Agent, project: TodoistProject) -> list[TodoistItem]:
        """Queue completion of items whose ticket no longer needs the agent."""
        closed = []

        for item in self.todoist.find_items_by_project_ids([project.id]):
            ticket_id = parse_ticket_id(item.content)
            if ticket_id is None:
                continue

            logger.info(f"Looking up ticket #{ticket_id}")
            try:
                ticket = self.freshdesk.get_ticket(ticket_id)
            except FreshdeskAPIError as e:
                logger.info(
                    f"Could not find ticket #{ticket_id} ({e}). "
                    "Marking item closed (ticket may have been deleted)"
                )
                ticket = None

            if needs_closure(ticket, agent.id):
                logger.info(f"Marking task for ticket #{ticket_id} complete")
                closed.append(self.todoist.close_item(item.id))

        return closed

    # ==========================================================================
    # Entry point
    # ==========================================================================

    def run(self) -> SyncResult:
        """Run the full reconciliation. Any error propagates."""
        result = SyncResult()

        logger.info("Downloading tickets")
        result.agent = self.resolve_agent()
        result.tickets = self.fetch_assigned_tickets(result.agent)

        result.project = self.resolve_project()

        result.created = self.create_missing_tasks(result.tickets, result.project)
        # New items must carry their real ids before the closure scan
        self.todoist.commit()

        result.closed = self.close_stale_tasks(result.agent, result.project)

        logger.info("Syncing updated data to Todoist")
        self.todoist.commit()

        logger.info(
            f"Created {len(result.created)} task(s), completed {len(result.closed)} task(s)"
        )
        logger.info("Done")
        return result
