"""
ReportForge Reporting - Template Context

Builds the data context handed to every report template, including the
derived aggregate fields (average salary, department breakdown).
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence


def format_currency(value: Optional[Any]) -> str:
    """
    Format an amount as whole currency units.

    Rounds half up, so 70000.5 becomes "$70,001".

    Example:
        85000 -> "$85,000"
    """
    if value is None:
        return "$0"
    amount = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${int(amount):,}"


def format_display_date(moment: datetime) -> str:
    """Month/day/year without zero padding, e.g. 10/9/2026."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_display_time(moment: datetime) -> str:
    """12-hour clock with seconds, e.g. 2:05:09 PM."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def default_title(report_type: str) -> str:
    """'summary' -> 'Summary Report'."""
    return f"{report_type[:1].upper()}{report_type[1:]} Report"


def _salary(user: Mapping[str, Any]) -> Decimal:
    return Decimal(str(user.get("salary") or 0))


@dataclass
class DepartmentSummary:
    """Head count and pay for one department."""

    name: str
    headcount: int
    total_salary: Decimal

    @property
    def avg_salary(self) -> str:
        if not self.headcount:
            return "$0"
        return format_currency(self.total_salary / self.headcount)


@dataclass
class ReportContext:
    """
    Data available to report templates.

    Aggregates are computed only over ``users``; an empty sequence yields
    zero head counts and "$0" salary figures.
    """

    report_type: str
    users: Sequence[Mapping[str, Any]]
    title: Optional[str] = None
    description: Optional[str] = None
    generated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Resolve title and description defaults."""
        if not self.title:
            self.title = default_title(self.report_type)
        if self.description is None:
            self.description = ""
        self.users = list(self.users)

    @property
    def total_users(self) -> int:
        return len(self.users)

    @property
    def total_salary(self) -> Decimal:
        return sum((_salary(user) for user in self.users), Decimal(0))

    @property
    def avg_salary(self) -> str:
        if not self.users:
            return "$0"
        return format_currency(self.total_salary / len(self.users))

    @property
    def departments(self) -> List[DepartmentSummary]:
        grouped: Dict[str, List[Mapping[str, Any]]] = defaultdict(list)
        for user in self.users:
            grouped[user.get("department") or "Unassigned"].append(user)
        return [
            DepartmentSummary(
                name=name,
                headcount=len(members),
                total_salary=sum((_salary(u) for u in members), Decimal(0)),
            )
            for name, members in sorted(grouped.items())
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the mapping passed to Jinja2."""
        return {
            "report_type": self.report_type,
            "title": self.title,
            "description": self.description,
            "users": self.users,
            "total_users": self.total_users,
            "generated_date": format_display_date(self.generated_at),
            "generated_time": format_display_time(self.generated_at),
            "generated_at": self.generated_at.isoformat(timespec="seconds"),
            "avg_salary": self.avg_salary,
            "total_salary": format_currency(self.total_salary),
            "departments": self.departments,
        }
