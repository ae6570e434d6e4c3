"""
Tests for frontmatter parsing: field extraction, body stripping, defaults
and the derived period.
"""
from terminal_resume.frontmatter import parse_frontmatter, title_from_filename


DOC = """---
title: "DevOps Engineer"
company: "Tech Innovations Inc."
period: 2021 - Present
order: 2
location: Remote
---
## Responsibilities
- Kubernetes
"""


def test_extracts_fields_and_strips_header():
    parsed = parse_frontmatter(DOC, "devops.md")
    assert parsed.title == "DevOps Engineer"
    assert parsed.order == 2
    assert parsed.metadata == {
        "company": "Tech Innovations Inc.",
        "period": "2021 - Present",
        "location": "Remote",
    }
    assert parsed.body == "## Responsibilities\n- Kubernetes\n"
    assert "---" not in parsed.body
    assert "company" not in parsed.body


def test_title_and_order_are_not_left_in_metadata():
    parsed = parse_frontmatter(DOC, "devops.md")
    assert "title" not in parsed.metadata
    assert "order" not in parsed.metadata


def test_no_header_returns_whole_text():
    text = "# Just markdown\n\nNo header here."
    parsed = parse_frontmatter(text, "my_first-post.md")
    assert parsed.body == text
    assert parsed.metadata == {}
    assert parsed.order == 999
    assert parsed.title == "My First Post"


def test_unclosed_header_is_body():
    text = "---\ntitle: Oops\nno closing marker"
    parsed = parse_frontmatter(text, "oops.md")
    assert parsed.body == text
    assert parsed.title == "Oops"
    assert parsed.metadata == {}


def test_unparseable_order_defaults():
    parsed = parse_frontmatter("---\norder: first\n---\nbody", "a.md")
    assert parsed.order == 999


def test_empty_value_does_not_bleed_into_next_line():
    parsed = parse_frontmatter("---\ncompany:\nperiod: 2020\n---\n", "a.md")
    assert "company" not in parsed.metadata
    assert parsed.metadata["period"] == "2020"


def test_period_derived_from_start_and_end():
    parsed = parse_frontmatter("---\nstart: 2019\nend: 2021\n---\n", "a.md")
    assert parsed.metadata["period"] == "2019 - 2021"


def test_period_from_single_bound():
    parsed = parse_frontmatter("---\nstart: March 2023\n---\n", "a.md")
    assert parsed.metadata["period"] == "March 2023"


def test_explicit_period_wins_over_derived():
    text = "---\nstart: 2019\nperiod: Summer 2020\nend: 2021\n---\n"
    parsed = parse_frontmatter(text, "a.md")
    assert parsed.metadata["period"] == "Summer 2020"


def test_school_and_institution_last_line_wins():
    parsed = parse_frontmatter("---\ninstitution: MIT\nschool: Stanford\n---\n", "a.md")
    assert parsed.metadata["institution"] == "Stanford"
    assert "school" not in parsed.metadata

    parsed = parse_frontmatter("---\nschool: Stanford\ninstitution: MIT\n---\n", "a.md")
    assert parsed.metadata["institution"] == "MIT"


def test_crlf_line_endings():
    parsed = parse_frontmatter("---\r\ntitle: Windows\r\n---\r\nbody\r\n", "a.md")
    assert parsed.title == "Windows"
    assert parsed.body == "body\n"


def test_title_from_filename():
    assert title_from_filename("senior-solutions_consultant.md") == "Senior Solutions Consultant"
    assert title_from_filename("") == ""
