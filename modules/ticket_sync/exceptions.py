# =========================================================================
# CUSTOM EXCEPTIONS
# =========================================================================

class TicketSyncError(Exception):
    """Base exception for ticket sync errors"""
    pass

class ConfigError(TicketSyncError):
    """Configuration is missing or invalid"""
    pass

class ProjectNotFoundError(ConfigError):
    """Target Todoist project does not exist"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Couldn't find the Freshdesk list '{name}' in Todoist")

class FreshdeskError(TicketSyncError):
    """Base exception for Freshdesk-related errors"""
    pass

class FreshdeskAPIError(FreshdeskError):
    """API request failed"""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)

class TodoistError(TicketSyncError):
    """Base exception for Todoist-related errors"""
    pass

class TodoistAPIError(TodoistError):
    """API request failed"""
    pass

class TodoistCommitError(TodoistError):
    """One or more queued commands were rejected"""

    def __init__(self, failures: dict):
        self.failures = failures
        super().__init__(f"Todoist rejected {len(failures)} command(s): {failures}")

class TodoistStateError(TodoistError):
    """Local mirror does not contain the requested object"""
    pass

class InvariantViolation(TicketSyncError):
    """Internal consistency check failed"""
    pass
