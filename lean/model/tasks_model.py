"""
The data model for tasks.

A task is one YAML file in the workspace. Field names are lower snake case, the
occurrence is a tagged union discriminated by its `type` field, and optional
fields are left out of the file entirely when they are not set.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from lean.util.slugs import normalize, slug
from lean.util.time_utils import now_rounded


class Weekday(str, Enum):
    Mon = "Mon"
    Tue = "Tue"
    Wed = "Wed"
    Thu = "Thu"
    Fri = "Fri"
    Sat = "Sat"
    Sun = "Sun"


class MonthlyPattern(BaseModel):
    """
    The nth given weekday of every month, like the third Friday.
    """

    week: int = Field(ge=1, le=5)
    day: Weekday


class WeeklyRecurrence(BaseModel, extra="forbid"):
    weekly: Weekday


class MonthlyRecurrence(BaseModel, extra="forbid"):
    monthly: MonthlyPattern


DAILY = "daily"

Recurrence = Union[Literal["daily"], WeeklyRecurrence, MonthlyRecurrence]
"""
How a periodic task repeats. In YAML this is `daily`, `{weekly: Mon}` or
`{monthly: {week: 3, day: Fri}}`.
"""


class OneTime(BaseModel):
    type: Literal["OneTime"] = "OneTime"


class Periodic(BaseModel):
    type: Literal["Periodic"] = "Periodic"
    recurrence: Recurrence


Occurrence = Annotated[Union[OneTime, Periodic], Field(discriminator="type")]


class Person(BaseModel):
    name: str


class TaskStatus(Enum):
    """
    Lifecycle state of a task, in priority order. A finished task that was also
    paused is finished; a paused task that was started is paused.
    """

    finished = "X"
    paused = "S"
    in_progress = "P"
    unstarted = "U"


class Task(BaseModel):
    title: str
    description: str
    occurrence: Occurrence
    effort: List[float]
    done: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: datetime
    due_at: Optional[datetime] = None
    relates_to: Optional[List["Task"]] = None
    depends_on: Optional[List["Task"]] = None
    started_at: Optional[datetime] = None
    paused_at: Optional[List[datetime]] = None
    resumed_at: Optional[List[datetime]] = None
    finished_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    people: Optional[List[Person]] = None

    @field_validator("title")
    @classmethod
    def _normalize_title(cls, value: str) -> str:
        return normalize(value)

    @field_validator("created_at")
    @classmethod
    def _drop_subseconds(cls, value: datetime) -> datetime:
        return value.replace(microsecond=0)

    @classmethod
    def new_draft(cls) -> "Task":
        """
        The blank template a new task starts from.
        """
        return cls(
            title="",
            description="",
            occurrence=OneTime(),
            effort=[],
            created_at=now_rounded(),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    def title_slug(self) -> str:
        return slug(self.title)

    def status(self) -> TaskStatus:
        if self.finished_at:
            return TaskStatus.finished
        elif self.paused_at:
            return TaskStatus.paused
        elif self.started_at:
            return TaskStatus.in_progress
        else:
            return TaskStatus.unstarted

    def is_periodic(self) -> bool:
        return isinstance(self.occurrence, Periodic)

    def validation_errors(self, require_description: bool = False) -> List[str]:
        """
        Reasons this task can't be saved, if any.
        """
        errors = []
        if not self.title_slug():
            errors.append(
                "The title has no characters usable in a file name (letters, digits, - or _)."
            )
        if require_description and not self.description.strip():
            errors.append("The description must not be empty.")
        return errors

    def is_valid(self, require_description: bool = False) -> bool:
        return not self.validation_errors(require_description)


## Tests


def _weekly_task() -> Task:
    return Task(
        title="Title",
        description="Description",
        created_at=now_rounded(),
        effort=[5.0],
        occurrence=Periodic(recurrence=WeeklyRecurrence(weekly=Weekday.Mon)),
    )


def test_create_task():
    task = _weekly_task()

    assert task.title == "Title"
    assert task.description == "Description"
    assert len(task.effort) == 1
    assert task.done == 0.0
    assert task.is_periodic()
    assert task.status() == TaskStatus.unstarted

    assert task.is_valid()
    task.title = ""
    assert not task.is_valid()
    task.title = "!!! ???"
    assert task.title_slug() == ""
    assert not task.is_valid()
    task.title = "-"
    assert task.is_valid()


def test_description_policy():
    task = _weekly_task()
    task.description = ""
    assert task.is_valid()
    assert not task.is_valid(require_description=True)


def test_title_is_normalized():
    task = Task.from_dict(
        {
            "title": "  a \t  b\n",
            "description": "",
            "occurrence": {"type": "OneTime"},
            "effort": [],
            "created_at": "2019-10-09T13:00:00.500+02:00",
        }
    )
    assert task.title == "a b"
    assert task.created_at.microsecond == 0
    assert task.created_at.utcoffset().total_seconds() == 7200


def test_to_dict_omits_unset_fields():
    data = _weekly_task().to_dict()
    assert list(data.keys()) == [
        "title",
        "description",
        "occurrence",
        "effort",
        "done",
        "created_at",
    ]
    assert data["occurrence"] == {"type": "Periodic", "recurrence": {"weekly": "Mon"}}


def test_recurrence_variants():
    def parse(recurrence):
        return Task.from_dict(
            {
                "title": "T",
                "description": "D",
                "occurrence": {"type": "Periodic", "recurrence": recurrence},
                "effort": [10.0],
                "created_at": "2019-10-09T13:00:00+02:00",
            }
        ).occurrence.recurrence

    assert parse("daily") == DAILY
    assert parse({"weekly": "Tue"}) == WeeklyRecurrence(weekly=Weekday.Tue)
    monthly = parse({"monthly": {"week": 3, "day": "Fri"}})
    assert monthly == MonthlyRecurrence(monthly=MonthlyPattern(week=3, day=Weekday.Fri))


def test_status_priority():
    task = _weekly_task()
    ts = now_rounded()

    task.started_at = ts
    assert task.status() == TaskStatus.in_progress
    task.paused_at = [ts]
    assert task.status() == TaskStatus.paused
    task.finished_at = ts
    assert task.status() == TaskStatus.finished
