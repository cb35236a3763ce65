from typing import Optional
from ..domain.interfaces import IProgressReporter
from ..data.webhook_reporter import NullProgressReporter, WebhookProgressReporter

def build_progress_reporter(export_id: str, webhook_url: Optional[str]) -> IProgressReporter:
    """
    Public Service API: the reporter for one export.
    Without a webhook, progress is only tracked locally.
    """
    if webhook_url:
        return WebhookProgressReporter(export_id, webhook_url)
    return NullProgressReporter()
