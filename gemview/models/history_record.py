# gemview/models/history_record.py
from dataclasses import dataclass, field
from datetime import datetime


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass
class HistoryRecord:
    url: str
    when: datetime = field(default_factory=_now)
