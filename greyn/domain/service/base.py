"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold the business rules that span an entity and its
    repositories; entities themselves stay plain data.
    """

    pass
