"""
Freshdesk API client for Ticket Sync.

Handles agents and tickets endpoints (API v2).
"""

import logging
from typing import Optional, Union

import httpx

from .config import Config
from .exceptions import FreshdeskAPIError
from .models import Agent, Ticket
from .querybuilder import Predicate

logger = logging.getLogger(__name__)


class FreshdeskClient:
    """Freshdesk API client."""

    # Search API limits
    SEARCH_PAGE_SIZE = 30
    SEARCH_MAX_PAGES = 10

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: int = 30,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> 'FreshdeskClient':
        return cls(config.freshdesk_base_url, config.freshdesk_api_key, **kwargs)

    def _get_headers(self) -> dict:
        """Get request headers."""
        return {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
    ) -> Union[dict, list]:
        """Make a request to the Freshdesk API."""
        url = f"{self.base_url}/{endpoint}"
        logger.debug(f"{method} {url} {params or ''}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(
                    method,
                    url,
                    headers=self._get_headers(),
                    params=params,
                    auth=(self.api_key, 'X'),
                )

                # Check rate limits
                remaining = response.headers.get('X-RateLimit-Remaining')
                if remaining and remaining.isdigit() and int(remaining) < 10:
                    logger.warning(f"Freshdesk rate limit low: {remaining} remaining")

                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise FreshdeskAPIError(
                f"Freshdesk {method} {endpoint} failed: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise FreshdeskAPIError(f"Freshdesk {method} {endpoint} failed: {e}") from e
        except ValueError as e:
            raise FreshdeskAPIError(f"Freshdesk {method} {endpoint} returned invalid JSON") from e

    # ==========================================================================
    # Agents
    # ==========================================================================

    def get_current_agent(self) -> Agent:
        """Get the agent the API key belongs to."""
        data = self._request('GET', 'agents/me')
        try:
            return Agent.from_api(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise FreshdeskAPIError(f"Unexpected agent payload: {e}") from e

    # ==========================================================================
    # Tickets
    # ==========================================================================

    def search_tickets(self, query: Union[Predicate, str]) -> list[Ticket]:
        """
        Search tickets with a filter query.

        Walks result pages until a short page or the API page limit.
        """
        tickets = []

        for page in range(1, self.SEARCH_MAX_PAGES + 1):
            data = self._request(
                'GET',
                'search/tickets',
                params={'query': f'"{query}"', 'page': page},
            )
            try:
                results = data.get('results', [])
                tickets.extend(Ticket.from_api(t) for t in results)
            except (KeyError, TypeError, AttributeError) as e:
                raise FreshdeskAPIError(f"Unexpected search payload: {e}") from e

            if len(results) < self.SEARCH_PAGE_SIZE:
                break
        else:
            logger.warning(
                f"Search hit the {self.SEARCH_MAX_PAGES} page limit; results may be truncated"
            )

        return tickets

    def get_ticket(self, ticket_id: int) -> Ticket:
        """Get a single ticket by ID."""
        data = self._request('GET', f'tickets/{ticket_id}')
        try:
            return Ticket.from_api(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise FreshdeskAPIError(f"Unexpected ticket payload: {e}") from e
