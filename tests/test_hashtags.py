from jobcast.formatting.hashtags import (
    as_hashtag_string,
    generate_hashtags,
    job_specific_tags,
    merge_hashtags,
    pick_trending,
    suggest_hashtags,
)
from jobcast.models import JobRecord

from tests.fakes import make_scraped


def test_job_specific_tags_in_derivation_order():
    job = make_scraped(location="Lagos", job_type="Full Time", title="Backend Engineer")
    assert job_specific_tags(job) == ["Hiring", "NigeriaJobs", "Lagos", "FullTime", "TechJobs"]


def test_generate_without_trending():
    job = JobRecord(title="Marketing Manager", location="Remote", job_type="Contract")
    assert generate_hashtags(job) == ["Hiring", "NigeriaJobs", "RemoteJobs", "Contract", "Management"]


def test_trending_picks_relevant_first_then_fills():
    job = make_scraped()
    trending = ["#WorldCup", "TechJobsNG", "#LagosJobs", "Election", "Music"]
    assert generate_hashtags(job, trending) == ["TechJobsNG", "LagosJobs", "WorldCup", "Hiring", "NigeriaJobs"]


def test_pick_trending_keeps_given_order_for_fallbacks():
    assert pick_trending(["a", "b", "c", "d"]) == ["a", "b", "c"]
    assert pick_trending(["a", "remote work", "b"], limit=2) == ["remote work", "a"]


def test_hashtags_dedupe_case_insensitively():
    tags = generate_hashtags(make_scraped(), ["hiring"])
    assert tags[0] == "hiring"
    assert [t.lower() for t in tags].count("hiring") == 1
    assert len(tags) <= 5


def test_merge_hashtags_caps_total():
    assert merge_hashtags(["a", "b", "c"], ["d", "e", "f"]) == ["a", "b", "c", "d", "e"]
    assert merge_hashtags(["#x", "x", "", "#"]) == ["x"]


def test_hr_tag_needs_a_whole_word():
    assert "HR" in job_specific_tags(JobRecord(title="HR Officer"))
    assert "HR" not in job_specific_tags(JobRecord(title="Chrome Extension Developer"))


def test_suggest_hashtags_for_remote_engineering_role():
    tags = suggest_hashtags(title="Software Engineer", job_type="Remote", company="Acme")
    assert tags == [
        "hiring", "jobopening", "jobs", "techjobs", "softwareengineering",
        "remote", "remotework", "workfromhome", "careers",
    ]


def test_as_hashtag_string():
    assert as_hashtag_string(["#Hiring", "Lagos", " ", ""]) == "#Hiring #Lagos"
    assert as_hashtag_string([]) == ""
