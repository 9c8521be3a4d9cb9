import pytest

from jobcast.formatting.sections import (
    ensure_about_section,
    has_about_section,
    parse_sections,
    split_sections,
    strip_metadata,
)


def test_labels_are_canonicalised_in_order():
    raw = "About the role: Build APIs.\n\nRequirements: Node, SQL."
    assert parse_sections(raw) == "About the role:\nBuild APIs.\n\nRequirements:\nNode, SQL."


def test_sections_are_reordered():
    raw = "Benefits: Health cover.\nResponsibilities: Ship code."
    assert parse_sections(raw) == "Responsibilities:\nShip code.\n\nBenefits:\nHealth cover."


@pytest.mark.parametrize(
    "heading, label",
    [
        ("Qualifications", "Requirements"),
        ("What you'll do", "Responsibilities"),
        ("Key Duties", "Responsibilities"),
        ("Perks", "Benefits"),
        ("What we offer", "Benefits"),
        ("Overview", "About the role"),
        ("Must have", "Requirements"),
    ],
)
def test_heading_synonyms(heading, label):
    assert parse_sections(f"{heading}:\nSomething specific") == f"{label}:\nSomething specific"


def test_text_before_first_heading_goes_last():
    raw = "Great team, great mission.\nRequirements: SQL"
    assert parse_sections(raw) == "Requirements:\nSQL\n\nGreat team, great mission."


def test_unstructured_text_is_only_trimmed():
    assert parse_sections("  Just a plain description.  ") == "Just a plain description."


def test_whitespace_only_is_returned_unchanged():
    assert parse_sections("   ") == "   "
    assert parse_sections("") == ""


def test_headings_only_count_at_line_start():
    raw = "We value benefits: none at all."
    assert split_sections(raw) == {}
    assert parse_sections(raw) == raw


def test_repeated_section_keeps_both_paragraphs():
    raw = "Requirements: Python\nBenefits: Pension\nQualifications: BSc"
    assert parse_sections(raw) == "Requirements:\nPython\n\nBSc\n\nBenefits:\nPension"


def test_parse_is_stable_on_its_own_output():
    once = parse_sections("Benefits: Lunch\nAbout the role: Build things\nRequirements: Go")
    assert parse_sections(once) == once


@pytest.mark.parametrize(
    "raw",
    [
        "Requirements: Must have 3 years Python",
        "Requirements: You have strong SQL skills",
        "About the role: Summary of duties follows",
        "Responsibilities: Duties include filing reports",
        "Benefits: Perks are great",
        "About the role: Overview of the team\nRequirements: Qualifications in accounting",
    ],
)
def test_content_starting_with_a_heading_word_survives_reparsing(raw):
    once = parse_sections(raw)
    assert parse_sections(once) == once
    for line in raw.splitlines():
        assert line.split(": ", 1)[1] in once


def test_heading_without_colon_on_its_own_line():
    assert parse_sections("Requirements\nPython 3") == "Requirements:\nPython 3"


def test_heading_word_without_colon_is_content():
    raw = "Must have 3 years Python"
    assert split_sections(raw) == {}
    assert parse_sections(raw) == raw


def test_ensure_about_section_prepends_fallback():
    parsed = "Requirements:\nGo"
    out = ensure_about_section(parsed, "Paystack", "Backend Engineer")
    assert out == "About the role:\nPaystack is hiring a Backend Engineer.\n\nRequirements:\nGo"
    assert has_about_section(out)


def test_ensure_about_section_keeps_existing():
    parsed = "About the role:\nBuild APIs."
    assert ensure_about_section(parsed, "Acme", "Engineer") == parsed


def test_ensure_about_section_on_empty_description():
    assert ensure_about_section("", "Acme", "Engineer") == "About the role:\nAcme is hiring a Engineer."


# ── Metadata stripping ───────────────────────────────────────────────────


def test_posted_and_deadline_lines_are_removed():
    raw = "Posted: 2 days ago\nWe build APIs.\nDeadline: Not specified"
    assert strip_metadata(raw) == "We build APIs."


def test_aggregator_banner_is_removed():
    assert strip_metadata("Lagos | Remote Jobs\nBuild things") == "Build things"


def test_month_year_stamps_are_removed():
    out = strip_metadata("Published Jan 2024 and updated February 2024.")
    assert "2024" not in out
    assert "Jan" not in out
    assert "February" not in out


def test_lowercase_may_survives():
    out = strip_metadata("Candidates may apply from June onwards.")
    assert "may apply" in out
    assert "June" not in out


def test_blank_lines_collapse_after_stripping():
    raw = "Intro\n\nPosted: today\n\n\nRequirements: Go"
    assert "\n\n\n" not in strip_metadata(raw)
