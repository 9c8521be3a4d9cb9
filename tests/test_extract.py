import pytest

from jobcast.formatting.extract import detect_job_type, extract_job, find_apply_url

POSTING = (
    "Senior Backend Engineer at Paystack\n"
    "Location: Lagos, Nigeria\n"
    "Full-time\n"
    "\n"
    "About the role:\n"
    "Build APIs.\n"
    "\n"
    "Apply here: https://paystack.com/careers/123"
)


def test_empty_input_yields_defaults():
    fields = extract_job("")
    assert fields.title == ""
    assert fields.company == ""
    assert fields.location == "Not specified"
    assert fields.job_type == ""
    assert fields.description == ""
    assert fields.apply_link == ""
    assert fields.suggested_hashtags[:3] == ["hiring", "jobopening", "jobs"]


def test_structured_posting():
    fields = extract_job(POSTING)
    assert fields.title == "Senior Backend Engineer"
    assert fields.company == "Paystack"
    assert fields.location == "Lagos, Nigeria"
    assert fields.job_type == "Full-time"
    assert fields.apply_link == "https://paystack.com/careers/123"
    assert fields.description.startswith("About the role:\nBuild APIs.")
    assert "https://" not in fields.description
    assert "Apply here" not in fields.description
    assert fields.suggested_hashtags == ["hiring", "jobopening", "jobs", "techjobs", "careers"]


def test_email_becomes_mailto_link():
    fields = extract_job("Marketing Manager\nSend your CV to hr@acme.ng")
    assert fields.title == "Marketing Manager"
    assert fields.apply_link == "mailto:hr@acme.ng"
    assert "hr@acme.ng" not in fields.description


def test_labelled_apply_email():
    fields = extract_job("Title: Accountant\nApply to: jobs@acme.ng")
    assert fields.title == "Accountant"
    assert fields.apply_link == "mailto:jobs@acme.ng"


def test_remote_work_sets_location():
    fields = extract_job("Data Analyst\nThis is a remote position.")
    assert fields.title == "Data Analyst"
    assert fields.job_type == "Remote"
    assert fields.location == "Remote"


def test_labelled_company():
    fields = extract_job("Position: Product Designer\nCompany: Kuda Bank\nOffice: Abuja")
    assert fields.title == "Product Designer"
    assert fields.company == "Kuda Bank"
    assert fields.location == "Abuja"


@pytest.mark.parametrize(
    "raw",
    [
        "   ",
        "https://example.com",
        "@@@ ::: |||",
        "at\nat\nat",
        "Apply:",
        "x" * 5000,
        "Title:\nCompany:\nLocation:",
    ],
)
def test_never_raises(raw):
    fields = extract_job(raw)
    assert fields.location


@pytest.mark.parametrize(
    "text, expected",
    [
        ("This is a full time role", "Full-time"),
        ("part-time, 20 hours", "Part-time"),
        ("6 month contract", "Contract"),
        ("Summer Internship", "Internship"),
        ("Hybrid (Lagos)", "Hybrid"),
        ("Permanent role", ""),
    ],
)
def test_detect_job_type(text, expected):
    assert detect_job_type(text) == expected


def test_apply_url_prefers_job_links():
    text = "See https://acme.com/about and https://acme.com/jobs/1 for details"
    assert find_apply_url(text) == "https://acme.com/jobs/1"


def test_apply_url_falls_back_to_first_link():
    assert find_apply_url("Visit https://acme.com/about or https://acme.com/team") == "https://acme.com/about"
    assert find_apply_url("no links here") == ""
