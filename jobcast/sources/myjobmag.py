"""MyJobMag (Nigeria) job listings scraper.

Only the public listing page (/jobs) and job detail pages (/job/<slug>) are
fetched, one at a time with a short delay.
"""
from __future__ import annotations

import hashlib
import re
import time
from datetime import datetime, timezone

import requests
from bs4 import BeautifulSoup

from jobcast.log import get_logger
from jobcast.models import ScrapedJob
from jobcast.retry import retry
from jobcast.sources.base import JobSource

log = get_logger(__name__)

BASE_URL = "https://www.myjobmag.com"
USER_AGENT = "CareerExplorerBot/1.0 (Job Aggregator; contact@example.com)"
HEADERS: dict[str, str] = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "en-US,en;q=0.9",
}

DEFAULT_LOCATION = "Nigeria"
DEFAULT_JOB_TYPE = "Full Time"
MAX_DESCRIPTION_CHARS = 500
MIN_PARAGRAPH_CHARS = 50

_TITLE_COMPANY_RE = re.compile(r"at\s+(.+?)(?:\s*[-|]|$)", re.IGNORECASE)


def job_id_for(url: str) -> str:
    return hashlib.md5(url.encode("utf-8")).hexdigest()[:12]


def _absolute(href: str) -> str:
    return href if href.startswith("http") else f"{BASE_URL}{href}"


def _first_link_text(soup: BeautifulSoup, prefix: str) -> str:
    for a in soup.select(f'a[href^="{prefix}"]'):
        text = a.get_text(strip=True)
        if text:
            return text
    return ""


def parse_listing(html: str) -> list[str]:
    """Absolute job-detail URLs from a listings page, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    urls: list[str] = []
    for a in soup.select('a[href^="/job/"]'):
        href = a.get("href", "")
        if not href or "/job-application/" in href:
            continue
        url = f"{BASE_URL}{href}"
        if url not in urls:
            urls.append(url)
    return urls


def _description(soup: BeautifulSoup) -> str:
    parts: list[str] = []
    for p in soup.find_all("p")[:3]:
        text = p.get_text(strip=True)
        if len(text) > MIN_PARAGRAPH_CHARS:
            parts.append(text)
    desc = " ".join(parts)[:MAX_DESCRIPTION_CHARS]
    if len(desc) == MAX_DESCRIPTION_CHARS:
        desc = desc[: desc.rfind(" ")] + "..."
    return desc


def parse_job_page(html: str, url: str) -> ScrapedJob | None:
    """Build a ScrapedJob from a detail page; None when title or company is missing."""
    soup = BeautifulSoup(html, "html.parser")
    page_title = soup.title.get_text(strip=True) if soup.title else ""

    title = ""
    for tag in ("h2", "h1"):
        node = soup.find(tag)
        if node and node.get_text(strip=True):
            title = node.get_text(strip=True)
            break
    if not title and page_title:
        title = page_title.split(" at ")[0].strip()

    company = ""
    m = _TITLE_COMPANY_RE.search(page_title)
    if m:
        company = m.group(1).strip()
    if not company:
        company = _first_link_text(soup, "/jobs-at/")

    if not title or not company:
        log.info("Skipping %s: missing title or company", url)
        return None

    apply_url = url
    apply_link = soup.select_one('a[href*="/job-application/"], a[href*="/apply-now/"]')
    if apply_link and apply_link.get("href"):
        apply_url = _absolute(apply_link["href"])

    return ScrapedJob(
        id=job_id_for(url),
        title=title,
        company=company,
        location=_first_link_text(soup, "/jobs-location/") or DEFAULT_LOCATION,
        job_type=_first_link_text(soup, "/jobs-by-type/") or DEFAULT_JOB_TYPE,
        description=_description(soup) or f"{title} position at {company}",
        apply_url=apply_url,
        source_url=url,
        scraped_at=datetime.now(timezone.utc).isoformat(),
    )


class MyJobMagSource(JobSource):
    def __init__(self, env_getter=None, *, request_delay: float = 0.5, session: requests.Session | None = None) -> None:
        self.request_delay = request_delay
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    @retry(max_attempts=3, base_delay=1.5, retryable=(requests.RequestException, OSError))
    def _get(self, url: str) -> str:
        r = self.session.get(url, timeout=20)
        r.raise_for_status()
        return r.text

    def job_urls(self) -> list[str]:
        return parse_listing(self._get(f"{BASE_URL}/jobs"))

    def fetch(self, limit: int = 30) -> list[ScrapedJob]:
        log.info("Starting job scrape from MyJobMag...")
        urls = self.job_urls()
        log.info("Found %d job URLs", len(urls))

        jobs: list[ScrapedJob] = []
        for i, url in enumerate(urls[:limit]):
            if i and self.request_delay:
                time.sleep(self.request_delay)
            try:
                job = parse_job_page(self._get(url), url)
            except Exception as exc:
                log.warning("Error scraping %s: %s", url, exc)
                continue
            if job:
                jobs.append(job)

        log.info("Successfully scraped %d jobs", len(jobs))
        return jobs
