from __future__ import annotations

import dataclasses


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_name(name: str) -> str:
    return name.strip().casefold()


@dataclasses.dataclass(frozen=True)
class GitUser:
    name: str
    email: str = ""

    @property
    def label(self) -> str:
        return f"{self.name} <{self.email}>" if self.email else self.name


@dataclasses.dataclass(frozen=True)
class AuthorMatcher:
    """
    Identity of the person the report is about.

    `git log --author` filters by regex on "name <email>"; collaborator
    exclusion mirrors that loosely with a case-insensitive substring match
    on either the name or the email.
    """

    author: str

    @property
    def needle(self) -> str:
        return self.author.strip().casefold()

    def matches(self, author_name: str, author_email: str) -> bool:
        n = self.needle
        if not n:
            return False
        return n in normalize_name(author_name) or n in normalize_email(author_email)
