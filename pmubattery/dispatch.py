"""Series dispatcher - routes submitted samples to their series stores."""

import logging
from typing import Dict, List, Optional

from pmubattery.core.errors import StoreError
from pmubattery.core.sink import MetricSink, SeriesStore

log = logging.getLogger(__name__)


class SeriesDispatcher(MetricSink):
    """MetricSink that hands each sample to the store registered for it.

    Store failures are logged here and never reach the emitter.
    """

    def __init__(self, host: str):
        self._host = host
        self._stores: Dict[str, SeriesStore] = {}  # series -> store

    @property
    def host(self) -> str:
        return self._host

    def register(self, store: SeriesStore) -> None:
        """Register a store under its series name, replacing any previous one."""
        if store.series in self._stores:
            log.debug("Replacing store for series %s", store.series)
        self._stores[store.series] = store

    def get_store(self, series: str) -> Optional[SeriesStore]:
        return self._stores.get(series)

    def registered(self) -> List[str]:
        return sorted(self._stores)

    def submit(self, series: str, label: str, value: str) -> None:
        store = self._stores.get(series)
        if store is None:
            log.warning("No store registered for series %s, dropping %s", series, value)
            return
        try:
            store.update(self._host, label, value)
        except StoreError as e:
            log.warning("Failed to persist %s[%s]=%s: %s", series, label, value, e)
        except Exception:
            log.exception("Store for %s failed unexpectedly", series)

    def close(self) -> None:
        for store in self._stores.values():
            try:
                store.close()
            except Exception:
                log.debug("Closing store for %s failed", store.series)
