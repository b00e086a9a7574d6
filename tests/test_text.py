from __future__ import annotations

from git_wrapped.analysis_paths import file_type_key, is_clean_file_type
from git_wrapped.analysis_text import commit_type, extract_emoji, extract_keywords, is_hotfix, is_merge, is_revert, punctuation_counts


def test_extract_keywords_drops_short_tokens_and_punctuation() -> None:
    assert extract_keywords("fix: 修复 bug in a-b_c 🎉") == ["fix", "修复", "bug", "in", "b_c"]
    assert extract_keywords("") == []


def test_extract_keywords_non_ascii_letters_are_separators() -> None:
    assert extract_keywords("café déjà") == ["caf"]


def test_extract_emoji() -> None:
    assert extract_emoji("🚀 ship it ✨") == ["🚀", "✨"]
    assert extract_emoji("plain") == []


def test_commit_type() -> None:
    assert commit_type("Feat(ui): new button") == "feat"
    assert commit_type("fix: typo") == "fix"
    assert commit_type("feature: not conventional") is None
    assert commit_type("update readme") is None


def test_message_flags() -> None:
    assert is_merge("Merge pull request #1")
    assert not is_merge("feat: merge sort")
    assert is_revert('Revert "feat: x"')
    assert is_hotfix("BugFix: null check")
    assert is_hotfix("deploy HOTFIX")
    assert not is_hotfix("fix: bug")
    assert punctuation_counts("why?! why?") == (1, 2)


def test_file_type_key() -> None:
    assert file_type_key("src/app.py") == ".py"
    assert file_type_key("Makefile") == "Makefile"
    assert file_type_key("docs/.gitignore") == ".gitignore"
    assert is_clean_file_type(".py")
    assert not is_clean_file_type('.py"')
    assert not is_clean_file_type("new}")
