from dmv_price_tracker.config import Settings
from dmv_price_tracker.sources.file_source import FileRecordSource
from dmv_price_tracker.sources.http_source import HttpRecordSource
from dmv_price_tracker.sources.providers import RecordSource


def get_source(settings: Settings) -> RecordSource:
    if settings.data_url:
        return HttpRecordSource(settings.data_url)
    return FileRecordSource(settings.data_path)
