"""
Tests for date resolution and the per-directory sort policies.
"""
from datetime import datetime, timezone

from terminal_resume.models import ContentItem
from terminal_resume.sorting import resolve_date, sort_items

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def ts(*args):
    return datetime(*args, tzinfo=timezone.utc).timestamp()


def item(title, order=999, **metadata):
    return ContentItem(name=f"{title.lower()}.md", title=title, order=order, metadata=metadata)


# ─── Date resolution ──────────────────────────────────────────────────────

def test_ongoing_markers_resolve_to_now():
    for text in ("Present", "PRESENT", "2021 - present", "Current", "active", "In Progress"):
        assert resolve_date(text, NOW) == NOW.timestamp()


def test_present_uses_wall_clock_by_default():
    before = datetime.now(timezone.utc).timestamp()
    resolved = resolve_date("2020 - Present")
    after = datetime.now(timezone.utc).timestamp()
    assert before <= resolved <= after


def test_range_uses_last_part():
    assert resolve_date("2013 - 2015", NOW) == ts(2015, 12, 31)
    assert resolve_date("June 2019 - February 2023", NOW) == ts(2023, 2, 1)


def test_month_year_formats():
    assert resolve_date("June 2022", NOW) == ts(2022, 6, 1)
    assert resolve_date("Jun 2022", NOW) == ts(2022, 6, 1)
    assert resolve_date("2024-03", NOW) == ts(2024, 3, 1)


def test_year_token_resolves_to_end_of_year():
    assert resolve_date("Fall 2018", NOW) == ts(2018, 12, 31)
    assert resolve_date("2016", NOW) == ts(2016, 12, 31)


def test_generic_parse():
    assert resolve_date("5/6/07", NOW) == ts(2007, 5, 6)


def test_unknown_is_zero():
    assert resolve_date("sometime", NOW) == 0.0
    assert resolve_date("", NOW) == 0.0
    assert resolve_date(None, NOW) == 0.0


# ─── Sorting ──────────────────────────────────────────────────────────────

def test_projects_in_progress_first_regardless_of_date():
    items = [
        item("Shiny", status="Completed", timeline="2024 - 2025"),
        item("Old Hobby", status="in progress", timeline="2010"),
        item("Older", status="Completed", timeline="2019"),
    ]
    titles = [i.title for i in sort_items(items, "Projects", NOW)]
    assert titles == ["Old Hobby", "Shiny", "Older"]


def test_projects_fall_back_to_period():
    items = [
        item("A", period="2015"),
        item("B", period="2020"),
    ]
    assert [i.title for i in sort_items(items, "projects", NOW)] == ["B", "A"]


def test_experience_most_recent_first():
    items = [
        item("Consultant", period="June 2019 - February 2023"),
        item("Engineer", period="March 2023 - Present"),
        item("Intern", period="Summer"),
    ]
    titles = [i.title for i in sort_items(items, "Experience", NOW)]
    assert titles == ["Engineer", "Consultant", "Intern"]


def test_education_ties_by_order_then_title():
    items = [
        item("Zeta", order=2, period="2015"),
        item("Beta", order=1, period="2015"),
        item("Alpha", order=1, period="2015"),
    ]
    titles = [i.title for i in sort_items(items, "Education", NOW)]
    assert titles == ["Alpha", "Beta", "Zeta"]


def test_other_directories_sort_by_order():
    items = [
        item("Second", order=2, period="2024"),
        item("First", order=1, period="2001"),
        item("Unordered"),
    ]
    titles = [i.title for i in sort_items(items, "Journal", NOW)]
    assert titles == ["First", "Second", "Unordered"]


def test_sort_does_not_mutate_input():
    items = [item("B", order=2), item("A", order=1)]
    sort_items(items, "Skills", NOW)
    assert [i.title for i in items] == ["B", "A"]
