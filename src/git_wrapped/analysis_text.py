from __future__ import annotations

import re

EMOJI_RE = re.compile(
    "[\U0001F300-\U0001F9FF]|[\u2600-\u26FF]|[\u2700-\u27BF]|[\U0001F600-\U0001F64F]|[\U0001F680-\U0001F6FF]"
)
# ASCII word characters and CJK unified ideographs survive, everything else is a separator.
NON_WORD_RE = re.compile(r"[^\w\u4e00-\u9fa5]", re.ASCII)
COMMIT_TYPE_RE = re.compile(r"^(feat|fix|docs|style|refactor|perf|test|chore|build|ci|revert)(\(.+\))?:", re.IGNORECASE)

MIN_KEYWORD_LEN = 2

# Applied only when merging keyword rankings across repositories.
STOP_WORDS = frozenset(
    {"Merge", "branch", "into", "master", "release", "publish", "patch", "feature", "from", "skip", "ci", "auto", "merge"}
)


def extract_keywords(text: str) -> list[str]:
    cleaned = EMOJI_RE.sub(" ", text or "")
    cleaned = NON_WORD_RE.sub(" ", cleaned)
    return [w for w in cleaned.split() if len(w) >= MIN_KEYWORD_LEN]


def extract_emoji(text: str) -> list[str]:
    return EMOJI_RE.findall(text or "")


def commit_type(message: str) -> str | None:
    m = COMMIT_TYPE_RE.match(message or "")
    if m is None:
        return None
    return m.group(1).lower()


def is_merge(message: str) -> bool:
    return (message or "").lower().startswith("merge")


def is_revert(message: str) -> bool:
    return (message or "").lower().startswith("revert")


def is_hotfix(message: str) -> bool:
    msg = (message or "").lower()
    return "hotfix" in msg or "bugfix" in msg


def punctuation_counts(message: str) -> tuple[int, int]:
    msg = message or ""
    return msg.count("!"), msg.count("?")
