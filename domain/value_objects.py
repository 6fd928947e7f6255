import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MonthBucket:
    year: int
    month: int  # 1–12
    count: int = 0

    @property
    def label(self) -> str:
        return f"{calendar.month_abbr[self.month]} {self.year}"


@dataclass(frozen=True)
class ExportRow:
    kind: str
    name: str
    identifier: str
    status: str
    submitted_date: date
