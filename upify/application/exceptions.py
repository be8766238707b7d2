class CatalogLoadError(RuntimeError):
    """Raised when the catalog source cannot supply the active services."""
    pass


class SessionNotFoundError(KeyError):
    """Raised when an order session id is unknown or was abandoned."""
    pass
