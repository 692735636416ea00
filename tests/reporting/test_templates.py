"""
Tests for report template rendering.

Covers the template context (derived fields and currency formatting),
named templates, fallback to the built-in default and HTML escaping.
"""

from datetime import datetime

import pytest

from core.reporting.errors import RenderError
from core.reporting.templates import DEFAULT_TEMPLATE_NAME, ReportContext, ReportTemplateEngine
from core.reporting.templates.context import (
    default_title,
    format_currency,
    format_display_date,
    format_display_time,
)

GENERATED_AT = datetime(2026, 3, 7, 14, 5, 9)

USERS = [
    {
        "id": 1, "name": "John Doe", "email": "john.doe@company.com", "phone": "+1-555-0101",
        "department": "Engineering", "position": "Senior Developer", "salary": 85000,
        "hire_date": "2022-01-15",
    },
    {
        "id": 2, "name": "Jane Smith", "email": "jane.smith@company.com", "phone": None,
        "department": "Marketing", "position": "Marketing Manager", "salary": 75000,
        "hire_date": "2021-06-20",
    },
    {
        "id": 3, "name": "Mike Johnson", "email": "mike.johnson@company.com", "phone": None,
        "department": "Sales", "position": "Sales Representative", "salary": 55000,
        "hire_date": "2023-03-10",
    },
]


@pytest.fixture
def engine():
    return ReportTemplateEngine()


class TestFormatting:
    """Tests for formatting helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (85000, "$85,000"),
            (70000.5, "$70,001"),
            (70000.49, "$70,000"),
            (0, "$0"),
            (None, "$0"),
            (1234567.0, "$1,234,567"),
        ],
    )
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected

    def test_display_date_and_time(self):
        assert format_display_date(GENERATED_AT) == "3/7/2026"
        assert format_display_time(GENERATED_AT) == "2:05:09 PM"
        assert format_display_time(datetime(2026, 1, 1, 0, 0, 1)) == "12:00:01 AM"

    def test_default_title(self):
        assert default_title("employee") == "Employee Report"
        assert default_title("summary") == "Summary Report"


class TestReportContext:
    """Tests for the derived template context."""

    def test_average_salary(self):
        """Test the mean is rounded to whole units and formatted."""
        context = ReportContext("employee", USERS, generated_at=GENERATED_AT)
        assert context.avg_salary == "$71,667"

    def test_empty_users(self):
        """Test an empty selection yields zero aggregates."""
        data = ReportContext("employee", [], generated_at=GENERATED_AT).to_dict()

        assert data["total_users"] == 0
        assert data["avg_salary"] == "$0"
        assert data["total_salary"] == "$0"
        assert data["departments"] == []

    def test_defaults(self):
        """Test title and description defaults."""
        data = ReportContext("summary", USERS, generated_at=GENERATED_AT).to_dict()

        assert data["title"] == "Summary Report"
        assert data["description"] == ""
        assert data["generated_date"] == "3/7/2026"
        assert data["generated_time"] == "2:05:09 PM"
        assert data["generated_at"] == "2026-03-07T14:05:09"

    def test_departments(self):
        """Test users are grouped per department, sorted by name."""
        users = USERS + [{**USERS[0], "id": 4, "name": "Eve", "salary": 95000}]
        departments = ReportContext("summary", users).departments

        assert [d.name for d in departments] == ["Engineering", "Marketing", "Sales"]
        engineering = departments[0]
        assert engineering.headcount == 2
        assert engineering.avg_salary == "$90,000"


class TestNamedTemplates:
    """Tests for templates loaded from the template directory."""

    def test_employee_template(self, engine):
        result = engine.render("employee", USERS, generated_at=GENERATED_AT)

        assert result.ok
        assert not result.used_fallback
        assert result.template_name == "employee.html"
        assert "Employee Report" in result.html
        for user in USERS:
            assert user["name"] in result.html
        assert "$71,667" in result.html

    def test_summary_template(self, engine):
        result = engine.render(
            "summary", USERS, title="Team Overview", generated_at=GENERATED_AT
        )

        assert result.template_name == "summary.html"
        assert "Team Overview" in result.html
        assert "Marketing" in result.html
        assert "$215,000" in result.html

    def test_description_rendered(self, engine):
        result = engine.render("employee", USERS, description="All staff as of March")
        assert "All staff as of March" in result.html

    def test_custom_template_directory(self, tmp_path):
        (tmp_path / "roster.html").write_text(
            "<html><body>{{ title }}: {% for u in users %}{{ u.name }};{% endfor %}"
            " avg {{ avg_salary }}</body></html>"
        )
        engine = ReportTemplateEngine(template_dir=tmp_path)

        result = engine.render("roster", USERS[:2])

        assert result.template_name == "roster.html"
        assert "Roster Report: John Doe;Jane Smith;" in result.html
        assert "avg $80,000" in result.html


class TestFallback:
    """Tests for falling back to the built-in default template."""

    def test_missing_template(self, engine):
        result = engine.render("quarterly", USERS, generated_at=GENERATED_AT)

        assert result.used_fallback
        assert result.template_name == DEFAULT_TEMPLATE_NAME
        assert isinstance(result.error, RenderError)
        assert "Quarterly Report" in result.html
        assert "CONFIDENTIAL" in result.html
        assert "$71,667" in result.html
        assert "3/7/2026" in result.html
        for user in USERS:
            assert user["name"] in result.html

    def test_malformed_template(self, tmp_path):
        (tmp_path / "broken.html").write_text("<html>{% for user in users %}</html>")
        engine = ReportTemplateEngine(template_dir=tmp_path)

        result = engine.render("broken", USERS)

        assert result.used_fallback
        assert "TemplateSyntaxError" in result.error.reason
        assert "Broken Report" in result.html

    def test_empty_template(self, tmp_path):
        (tmp_path / "blank.html").write_text("   \n")
        engine = ReportTemplateEngine(template_dir=tmp_path)

        result = engine.render("blank", USERS)

        assert result.used_fallback
        assert "empty" in result.error.reason

    def test_invalid_name_never_touches_filesystem(self, engine):
        result = engine.try_render("../../etc/passwd", {})

        assert not result.ok
        assert result.html is None

    def test_default_with_no_users(self, engine):
        result = engine.render("nothing", [])

        assert "No employee records matched this report." in result.html
        assert "$0" in result.html


class TestEscaping:
    """Tests that user data cannot inject markup."""

    def test_named_template_escapes(self, engine):
        users = [{**USERS[0], "name": "<script>alert(1)</script>"}]
        result = engine.render("employee", users)

        assert "<script>alert(1)</script>" not in result.html
        assert "&lt;script&gt;" in result.html

    def test_default_template_escapes(self, engine):
        users = [{**USERS[0], "name": "<b>bold</b>"}]
        result = engine.render("unknown", users, title="<i>t</i>")

        assert "<b>bold</b>" not in result.html
        assert "&lt;i&gt;t&lt;/i&gt;" in result.html
