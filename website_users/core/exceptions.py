# website_users/core/exceptions.py


class RepositoryError(Exception):
    """Raised when a repository operation cannot be carried out.

    Route handlers translate subclasses into HTTP errors; the repository
    itself never retries or recovers.
    """


class NotFound(RepositoryError):
    """No record exists for the requested id."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidArgument(RepositoryError, ValueError):
    """Paging or sorting parameters are malformed."""
