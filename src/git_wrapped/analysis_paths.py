from __future__ import annotations

import posixpath
import re

# `git log --numstat` renders renames as `old => new` or `src/{old => new}/file.py`.
BRACE_RENAME_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


def normalize_numstat_path(path: str) -> str:
    """The post-rename path of a numstat entry."""
    p = path.strip()
    if BRACE_RENAME_RE.search(p):
        p = BRACE_RENAME_RE.sub(lambda m: m.group(2), p)
        # an empty side of the brace leaves a doubled or edge slash
        p = re.sub(r"/{2,}", "/", p).strip("/")
    elif " => " in p:
        p = p.split(" => ")[-1]
    return p.strip()


def file_type_key(path: str) -> str:
    """Extension with its dot (".py"), or the base name when there is none."""
    p = path.replace("\\", "/")
    base = posixpath.basename(p)
    _, ext = posixpath.splitext(base)
    return ext or base


def is_clean_file_type(key: str) -> bool:
    # brace/quote fragments come from odd rename or quoted-path renderings
    return "}" not in key and '"' not in key
