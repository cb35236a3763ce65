import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List

import requests

from canvas_export.core.config.settings import settings
from canvas_export.core.common.enums import ProgressStatus
from ..domain.interfaces import IProgressReporter
from ..domain.models import ProgressEvent

logger = logging.getLogger(__name__)


class NullProgressReporter(IProgressReporter):
    """Used when the submission has no webhook. Only remembers the last value."""

    def __init__(self):
        self._last_progress = 0

    @property
    def last_progress(self) -> int:
        return self._last_progress

    def report(self, progress: int, status: ProgressStatus) -> None:
        self._last_progress = progress


class WebhookProgressReporter(IProgressReporter):
    """
    POSTs {export_id, progress, status} to the submission's webhook.

    Posts run on one background worker, so they leave in the order they were
    reported and the capture loop never waits on the network.
    """

    def __init__(self, export_id: str, webhook_url: str, timeout: float = None,
                 session: requests.Session = None):
        self.export_id = export_id
        self.webhook_url = webhook_url
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self._last_progress = 0
        self._pending: List = []
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"progress-{export_id}")

    @property
    def last_progress(self) -> int:
        return self._last_progress

    def report(self, progress: int, status: ProgressStatus) -> None:
        event = ProgressEvent(self.export_id, progress, status)
        self._last_progress = progress
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(self._executor.submit(self._post, event))

    def flush(self, timeout: float = None) -> None:
        if self._pending:
            wait(self._pending, timeout=timeout)
            self._pending = [f for f in self._pending if not f.done()]

    def close(self) -> None:
        self.flush()
        self._executor.shutdown(wait=True)

    def _post(self, event: ProgressEvent) -> None:
        try:
            response = self.session.post(self.webhook_url, json=event.to_json(), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Failed to report progress {event.progress}% ({event.status.value}): {e}")
            return
        if not response.ok:
            logger.warning(
                f"Progress webhook answered {response.status_code} for "
                f"{event.progress}% ({event.status.value})"
            )
