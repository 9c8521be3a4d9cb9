import pytest

from jobcast.formatting.apply import (
    RenderStyle,
    apply_href,
    format_apply_section,
    is_email_apply_link,
)

EMAIL_TEXT = "Interested and qualified candidates should send their CVs to: jobs@acme.com"
LISTING_TEXT = "Interested and qualified? Apply via the original listing."


@pytest.mark.parametrize("style", list(RenderStyle))
@pytest.mark.parametrize("target", ["jobs@acme.com", "mailto:jobs@acme.com", "  jobs@acme.com  "])
def test_email_targets_render_without_markup(style, target):
    assert format_apply_section(target, style) == EMAIL_TEXT


@pytest.mark.parametrize("style", list(RenderStyle))
def test_aggregator_job_page_points_to_listing(style):
    url = "https://www.myjobmag.com/job/backend-engineer-paystack"
    assert format_apply_section(url, style) == LISTING_TEXT


def test_apply_url_equal_to_source_points_to_listing():
    url = "https://jobs.example.com/42"
    assert format_apply_section(url, RenderStyle.RICH, source_url=url) == LISTING_TEXT


def test_rich_link_is_escaped():
    out = format_apply_section("https://acme.com/apply?a=1&b=2", RenderStyle.RICH)
    assert out == 'Interested and qualified? <a href="https://acme.com/apply?a=1&amp;b=2">Apply Now</a>.'


def test_plain_link_is_spelled_out():
    out = format_apply_section("https://acme.com/careers/42", RenderStyle.PLAIN)
    assert out == "Interested and qualified? Apply Now.\nhttps://acme.com/careers/42"


def test_empty_target_renders_nothing():
    assert format_apply_section("   ", RenderStyle.PLAIN) == ""


def test_helpers():
    assert is_email_apply_link("mailto:x@y.co")
    assert not is_email_apply_link("https://y.co")
    assert apply_href("x@y.co") == "mailto:x@y.co"
    assert apply_href("https://y.co") == "https://y.co"
