"""Message payload builders shared by the channels."""

from datetime import datetime
from typing import Dict, Optional, Sequence

from jobalert.domain.models import Posting
from jobalert.utils.timestamps import format_date, format_for_display, utc_now

TELEGRAM_MESSAGE_LIMIT = 4096
WHATSAPP_MESSAGE_LIMIT = 1600
ELLIPSIS = "…"


def build_digest_context(
    postings: Sequence[Posting],
    subject_prefix: str = "Job Alert",
    generated_at: Optional[datetime] = None,
) -> Dict:
    """Template context for the email digest. Lists every posting."""
    generated_at = generated_at or utc_now()
    return {
        "subject_prefix": subject_prefix,
        "date": format_date(generated_at),
        "generated_at": format_for_display(generated_at),
        "count": len(postings),
        "postings": [
            {
                "title": p.title,
                "company": p.company,
                "source": p.source,
                "url": p.url or "",
                "snippet": p.snippet,
                "experience": p.experience_text or "",
                "salary": p.salary_text or "",
            }
            for p in postings
        ],
    }


def format_posting_line(posting: Posting) -> str:
    """``title — company`` followed by the link on its own line."""
    line = f"{posting.title} — {posting.company}"
    if posting.url:
        line = f"{line}\n{posting.url}"
    return line


def build_chat_message(
    postings: Sequence[Posting],
    max_postings: int,
    generated_at: Optional[datetime] = None,
    include_header: bool = True,
) -> str:
    """Plain-text summary of the first ``max_postings`` postings.

    The header counts every new posting, not only the listed ones.
    """
    blocks = [format_posting_line(p) for p in postings[:max_postings]]
    if include_header:
        header = f"New job postings ({len(postings)}) - {format_for_display(generated_at)}"
        blocks.insert(0, header)
    return "\n\n".join(blocks)


def truncate_message(text: str, limit: int) -> str:
    """Cut text to at most ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS
