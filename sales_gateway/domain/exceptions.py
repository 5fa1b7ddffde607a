"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataSourceError(DomainException):
    """Sales data source is unreachable or its content cannot be parsed"""

    pass


class StoreNotReadyError(DomainException):
    """Record store was read before a successful load"""

    pass
