"""Base class for domain services."""


class Service:
    """Marker base for Agora's domain services.

    Services hold the rules that span entities (threading, the vote
    ledger, cascades) and talk to storage only through repository
    interfaces.
    """
