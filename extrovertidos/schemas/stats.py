from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field


class MetricResult(BaseModel):
    """One aggregate count. ``available`` is False when the query failed and
    ``value`` holds the zero default."""
    value: int = 0
    available: bool = True

    @classmethod
    def unavailable(cls) -> "MetricResult":
        return cls(value=0, available=False)


class EventCounts(BaseModel):
    """Serialized with the dashboard keys (pendientes, publicados, rechazados)."""
    pending: MetricResult = Field(alias="pendientes")
    published: MetricResult = Field(alias="publicados")
    rejected: MetricResult = Field(alias="rechazados")

    model_config = ConfigDict(populate_by_name=True)


class UserCounts(BaseModel):
    total: MetricResult


class AdminStats(BaseModel):
    events: EventCounts = Field(alias="eventos")
    users: UserCounts = Field(alias="usuarios")
    generated_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(populate_by_name=True)

    @computed_field
    @property
    def degraded(self) -> bool:
        return bool(self.unavailable_metrics)

    @property
    def unavailable_metrics(self) -> List[str]:
        metrics = {
            "events.pending": self.events.pending,
            "events.published": self.events.published,
            "events.rejected": self.events.rejected,
            "users.total": self.users.total,
        }
        return [name for name, metric in metrics.items() if not metric.available]


class DailyCount(BaseModel):
    day: str
    date: str
    count: int = 0
