import pytest

from jobcast.formatting.validate import validate_job
from jobcast.models import JobRecord


def _job(**overrides) -> JobRecord:
    data = dict(title="Engineer", description="Build things.", apply_link="https://acme.com/jobs/1")
    data.update(overrides)
    return JobRecord(**data)


def test_valid_job_has_no_errors():
    assert validate_job(_job()) == []


def test_missing_fields_are_reported():
    errors = validate_job(_job(title=" ", description="", apply_link=""))
    assert errors == [
        "Job title is required",
        "Description is required",
        "Apply link or email is required",
    ]


@pytest.mark.parametrize("link", ["jobs@acme.com", "mailto:jobs@acme.com", "http://acme.com"])
def test_accepted_apply_links(link):
    assert validate_job(_job(apply_link=link)) == []


def test_link_without_scheme():
    assert validate_job(_job(apply_link="www.acme.com/jobs")) == [
        "Apply link must be a valid URL (include https://) or email address"
    ]


@pytest.mark.parametrize("link", ["https://", "mailto:not-an-email"])
def test_malformed_links(link):
    assert validate_job(_job(apply_link=link)) == ["Apply link must be a valid URL or email address"]
