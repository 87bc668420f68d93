"""
Ticket Sync Module - Freshdesk → Todoist

One-shot reconciliation of the current agent's open Freshdesk tickets
into a Todoist project.
"""

__version__ = "0.1.0"
