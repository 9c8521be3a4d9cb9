"""Streamlit UI for the job posting pipeline."""
from __future__ import annotations

import html
import sys
from dataclasses import replace
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobcast.config import get_env, get_posting_limits
from jobcast.formatting import (
    Channel,
    compose_message,
    evaluate,
    extract_job,
    generate_hashtags,
)
from jobcast.formatting.hashtags import normalize_tag
from jobcast.job_queue import get_queue
from jobcast.log import get_logger
from jobcast.models import JobRecord
from jobcast.pipeline import PLATFORMS, post_job, quick_post, scrape_and_queue

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

PLATFORM_LABELS: dict[str, str] = {"twitter": "X / Twitter", "telegram": "Telegram"}
JOB_TYPES: list[str] = ["", "Full-time", "Part-time", "Contract", "Freelance", "Internship", "Remote", "Hybrid"]
FORM_FIELDS: tuple[str, ...] = ("title", "company", "location", "job_type", "description", "apply_link", "hashtags")

_CARD_CSS = """
<style>
[data-testid="stMetric"] {
    background: rgba(255,255,255,0.6);
    padding: 0.75rem 1rem;
    border-radius: 12px;
    border: 1px solid rgba(0,0,0,0.06);
}
.preview-box {
    white-space: pre-wrap;
    padding: 0.75rem 1rem;
    background: rgba(255,255,255,0.7);
    border-radius: 10px;
    border: 1px solid rgba(74,144,217,0.25);
    font-size: 0.9rem;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _check(label: str, ok: bool) -> str:
    return f"{'✅' if ok else '⚠️'} {label}"


def _status() -> dict[str, bool]:
    return {
        "twitter": all(get_env(k) for k in (
            "TWITTER_API_KEY", "TWITTER_API_SECRET", "TWITTER_ACCESS_TOKEN", "TWITTER_ACCESS_TOKEN_SECRET",
        )),
        "telegram": bool(get_env("TELEGRAM_BOT_TOKEN") and get_env("TELEGRAM_CHANNEL_ID")),
        "queue": bool(get_env("UPSTASH_REDIS_REST_URL") and get_env("UPSTASH_REDIS_REST_TOKEN")),
    }


@st.cache_resource
def _queue():
    return get_queue(get_env)


def _form_value(key: str) -> str:
    return st.session_state.get(f"job_{key}", "")


def _job_from_form(image: bytes | None) -> JobRecord:
    tags = [normalize_tag(t) for t in _form_value("hashtags").replace(",", " ").split()]
    return JobRecord(
        title=_form_value("title").strip(),
        company=_form_value("company").strip(),
        location=_form_value("location").strip(),
        job_type=_form_value("job_type"),
        description=_form_value("description").strip(),
        apply_link=_form_value("apply_link").strip(),
        hashtags=tuple(t for t in tags if t),
        image=image,
    )


def _platform_picker(key: str) -> list[str]:
    cols = st.columns(len(PLATFORMS))
    chosen: list[str] = []
    for col, platform in zip(cols, PLATFORMS):
        if col.checkbox(PLATFORM_LABELS[platform], value=True, key=f"{key}_{platform}"):
            chosen.append(platform)
    return chosen


def _show_results(result: dict) -> None:
    for err in result.get("errors", []):
        st.error(err)
    for platform, outcome in result.get("results", {}).items():
        label = PLATFORM_LABELS.get(platform, platform)
        if outcome["success"]:
            st.success(f"{label}: posted")
            for url in outcome.get("urls", []):
                st.markdown(f"- [{url}]({url})")
        else:
            st.error(f"{label}: {outcome.get('error') or 'failed'}")


def _char_status(text: str) -> None:
    status = evaluate(text, get_posting_limits())
    st.progress(min(status.count / status.char_limit, 1.0))
    if status.needs_thread:
        st.warning(
            f"{status.count}/{status.char_limit} — posts as a thread of {status.thread_chunk_count}"
        )
    else:
        st.caption(f"{status.count}/{status.char_limit} characters ({status.remaining} remaining)")


# ── Page: Compose ────────────────────────────────────────────────────────


def page_compose() -> None:
    st.header("Compose Job Post")

    with st.expander("Paste a job posting to fill the form", expanded=False):
        raw = st.text_area("Job posting", height=220, key="paste_raw")
        if st.button("Extract details", use_container_width=True):
            if not raw.strip():
                st.warning("Paste a job posting first.")
            else:
                fields = extract_job(raw)
                for key in FORM_FIELDS[:-1]:
                    st.session_state[f"job_{key}"] = getattr(fields, key)
                if fields.job_type not in JOB_TYPES:
                    st.session_state["job_job_type"] = ""
                st.session_state["job_hashtags"] = " ".join(fields.suggested_hashtags)
                st.rerun()

    c1, c2 = st.columns(2)
    with c1:
        st.text_input("Job title *", key="job_title")
        st.text_input("Location", key="job_location")
        st.text_input("Apply link or email *", key="job_apply_link")
    with c2:
        st.text_input("Company", key="job_company")
        st.selectbox("Job type", JOB_TYPES, key="job_job_type")
        st.text_input("Hashtags", key="job_hashtags", help="Space or comma separated")
    st.text_area("Description *", height=260, key="job_description")
    upload = st.file_uploader("Image (optional)", type=["png", "jpg", "jpeg", "gif", "webp"])
    image = upload.getvalue() if upload else None

    job = _job_from_form(image)
    if not job.hashtags and job.title:
        job = replace(job, hashtags=tuple(generate_hashtags(job)))

    st.divider()
    st.subheader("Preview")
    tab_x, tab_tg = st.tabs([PLATFORM_LABELS["twitter"], PLATFORM_LABELS["telegram"]])
    with tab_x:
        twitter_text = compose_message(job, Channel.TWITTER)
        st.markdown(f'<div class="preview-box">{html.escape(twitter_text)}</div>', unsafe_allow_html=True)
        _char_status(twitter_text)
    with tab_tg:
        st.markdown(compose_message(job, Channel.TELEGRAM), unsafe_allow_html=True)

    st.divider()
    platforms = _platform_picker("compose")
    if st.button("Post Job", type="primary", use_container_width=True):
        with st.spinner("Posting…"):
            _show_results(post_job(job, platforms))


# ── Page: Quick Post ─────────────────────────────────────────────────────


def page_quick_post() -> None:
    st.header("Quick Post")
    st.caption("Posts the message exactly as written.")

    message = st.text_area("Message", height=220, key="quick_message")
    if message:
        _char_status(message)
    upload = st.file_uploader("Image (optional)", type=["png", "jpg", "jpeg", "gif", "webp"], key="quick_image")
    platforms = _platform_picker("quick")

    if st.button("Post", type="primary", use_container_width=True):
        with st.spinner("Posting…"):
            _show_results(quick_post(message, platforms, upload.getvalue() if upload else None))


# ── Page: Dashboard ──────────────────────────────────────────────────────


def page_dashboard() -> None:
    st.header("Dashboard")
    queue = _queue()

    c1, c2 = st.columns(2)
    if c1.button("Scrape Now", type="primary", use_container_width=True):
        with st.status("Scraping job listings…", expanded=True) as sw:
            try:
                result = scrape_and_queue(queue=queue)
                sw.write(
                    f"Scraped {result['scraped']} job(s), skipped {result['excluded']}, "
                    f"queued {result['added']} new"
                )
                sw.update(label="Scrape complete!", state="complete")
            except Exception as exc:
                log.error("Scrape failed: %s", exc)
                sw.update(label="Scrape failed", state="error")
                st.error(str(exc))
    if c2.button("Clear Today's Queue", use_container_width=True):
        st.info(f"Cleared {queue.clear_pending()} pending job(s)")

    pending_page = int(st.session_state.get("pending_page", 1))
    history_page = int(st.session_state.get("history_page", 1))
    stats = queue.get_stats(pending_page=pending_page, history_page=history_page)

    c1, c2, c3 = st.columns(3)
    c1.metric("Pending Today", stats.pending_today)
    c2.metric("Posted Today", stats.posted_today)
    c3.metric("Total Posted", stats.total_posted)

    tab_pending, tab_history = st.tabs(["Pending", "Posted Today"])
    with tab_pending:
        if not stats.pending_jobs:
            st.info("Nothing queued for today.")
        for job in stats.pending_jobs:
            with st.expander(f"{job.title} — {job.company}"):
                st.caption(f"{job.location} · {job.job_type}")
                st.write(job.description)
                st.markdown(f"[Apply]({job.apply_url})")
        if stats.pending_total > 10:
            st.number_input("Page", 1, (stats.pending_total + 9) // 10, key="pending_page")
    with tab_history:
        if not stats.recent_history:
            st.info("Nothing posted yet today.")
        for entry in stats.recent_history:
            st.markdown(f"**{entry['title']}** at {entry['company']} · {entry['posted_at']}")
        if stats.history_total > 10:
            st.number_input("Page", 1, (stats.history_total + 9) // 10, key="history_page")


# ── Main ─────────────────────────────────────────────────────────────────


def _inject_css() -> None:
    st.markdown(_CARD_CSS, unsafe_allow_html=True)


def _sidebar_status() -> None:
    with st.sidebar:
        st.divider()
        s = _status()
        st.markdown("**Status**")
        st.markdown(_check("X / Twitter credentials", s["twitter"]))
        st.markdown(_check("Telegram credentials", s["telegram"]))
        st.markdown(_check("Persistent queue", s["queue"]))
        limits = get_posting_limits()
        st.caption(f"Post limit: {limits.char_limit} characters")


def _wrap_compose():
    _inject_css()
    _sidebar_status()
    page_compose()


def _wrap_quick_post():
    _inject_css()
    _sidebar_status()
    page_quick_post()


def _wrap_dashboard():
    _inject_css()
    _sidebar_status()
    page_dashboard()


pages = [
    st.Page(_wrap_compose, title="Compose", icon="📝", url_path="compose", default=True),
    st.Page(_wrap_quick_post, title="Quick Post", icon="⚡", url_path="quick-post"),
    st.Page(_wrap_dashboard, title="Dashboard", icon="📊", url_path="dashboard"),
]

nav = st.navigation(pages)
nav.run()
