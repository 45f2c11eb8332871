"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnknownPayoffStrategyError(DomainException):
    """Simulator was asked for a strategy other than avalanche or snowball"""

    pass
