"""Command-line entry points for scraping, posting and previewing jobs.

Usage:
  python run_agent.py scrape [--limit N]
  python run_agent.py autopost [--limit N]
  python run_agent.py stats
  python run_agent.py clear
  python run_agent.py extract FILE
  python run_agent.py preview FILE [--concise] [--channel twitter|telegram]
  python run_agent.py status FILE

FILE is a pasted job posting; ``-`` reads standard input.
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from jobcast.config import get_env, get_posting_limits
from jobcast.formatting import Channel, compose_message, evaluate, extract_job
from jobcast.job_queue import get_queue
from jobcast.log import get_logger
from jobcast.models import ScrapedJob
from jobcast.pipeline import auto_post, scrape_and_queue

log = get_logger(__name__)


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _dump(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _cmd_scrape(args) -> int:
    _dump(scrape_and_queue(args.limit))
    return 0


def _cmd_autopost(args) -> int:
    result = auto_post(args.limit)
    _dump(result)
    return 0 if result["posted"] or not result["results"] else 1


def _cmd_stats(args) -> int:
    stats = get_queue(get_env).get_stats()
    print(f"  Pending today: {stats.pending_today}")
    print(f"  Posted today:  {stats.posted_today}")
    print(f"  Total posted:  {stats.total_posted}")
    for job in stats.pending_jobs:
        print(f"    - {job.title} at {job.company}")
    for entry in stats.recent_history:
        print(f"    ✓ {entry['title']} at {entry['company']} ({entry['posted_at']})")
    return 0


def _cmd_clear(args) -> int:
    count = get_queue(get_env).clear_pending()
    print(f"  Cleared {count} pending job(s)")
    return 0


def _cmd_extract(args) -> int:
    _dump(asdict(extract_job(_read(args.file))))
    return 0


def _cmd_preview(args) -> int:
    fields = extract_job(_read(args.file))
    channel = Channel(args.channel)
    if args.concise:
        job = ScrapedJob(
            id="preview",
            title=fields.title,
            company=fields.company,
            location=fields.location,
            job_type=fields.job_type,
            description=fields.description,
            apply_url=fields.apply_link,
            source_url="",
        )
    else:
        job = fields.to_job_record()
    print(compose_message(job, channel, concise=args.concise, limits=get_posting_limits()))
    return 0


def _cmd_status(args) -> int:
    text = _read(args.file)
    status = evaluate(text, get_posting_limits())
    print(f"  {status.count}/{status.char_limit} characters ({status.remaining} remaining)")
    if status.needs_thread:
        print(f"  Over the limit: posts as a thread of {status.thread_chunk_count}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobcast", description="Job listing aggregation and posting")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("scrape", help="scrape jobs and queue new ones for today")
    p.add_argument("--limit", type=int, default=None)
    p.set_defaults(func=_cmd_scrape)

    p = sub.add_parser("autopost", help="post pending jobs from today's queue")
    p.add_argument("--limit", type=int, default=None)
    p.set_defaults(func=_cmd_autopost)

    sub.add_parser("stats", help="show queue statistics").set_defaults(func=_cmd_stats)
    sub.add_parser("clear", help="drop today's pending jobs").set_defaults(func=_cmd_clear)

    p = sub.add_parser("extract", help="extract job fields from a pasted posting")
    p.add_argument("file")
    p.set_defaults(func=_cmd_extract)

    p = sub.add_parser("preview", help="compose a post from a pasted posting")
    p.add_argument("file")
    p.add_argument("--concise", action="store_true")
    p.add_argument("--channel", choices=[c.value for c in Channel], default=Channel.TWITTER.value)
    p.set_defaults(func=_cmd_preview)

    p = sub.add_parser("status", help="character count and thread estimate for a post")
    p.add_argument("file")
    p.set_defaults(func=_cmd_status)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except OSError as exc:
        log.error("%s: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
