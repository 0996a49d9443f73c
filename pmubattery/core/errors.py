"""Exceptions raised by the collector."""


class CollectorError(RuntimeError):
    """The collector was driven out of order (e.g. poll before discover)."""


class StoreError(RuntimeError):
    """A series store could not persist a value."""
