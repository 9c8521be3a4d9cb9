from jobcast.config import DEFAULT_SETTINGS, PostingLimits, get_posting_limits, load_settings


def test_missing_settings_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings == DEFAULT_SETTINGS
    settings["posting"]["per_run"] = 99
    assert DEFAULT_SETTINGS["posting"]["per_run"] == 2


def test_settings_merge_over_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("posting:\n  per_run: 5\nexcluded_titles: [Gardener]\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings["posting"] == {"per_run": 5, "delay_seconds": 2.0}
    assert settings["excluded_titles"] == ["Gardener"]
    assert settings["scrape"]["limit"] == 30


def test_legacy_excluded_jobs_key(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("excluded_jobs:\n  - Steward\n", encoding="utf-8")
    assert load_settings(path)["excluded_titles"] == ["Steward"]


def test_non_mapping_settings_are_ignored(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_posting_limits(monkeypatch):
    assert get_posting_limits() == PostingLimits(280, 270)
    monkeypatch.setenv("TWITTER_PREMIUM", "true")
    assert get_posting_limits() == PostingLimits(25000, 24990)
