"""Tests for synthetic version generation and calendar date extraction."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from git import Actor, Repo

from apphome.errors import VersionGenerationError
from apphome.utils.git_ops import head_commit_hash, open_repository
from apphome.versioning import generate
from apphome.versioning.generate import (
    DateLayout,
    extract_calendar_date,
    format_synthetic_version,
    generate_from_commit,
)
from apphome.versioning.semver import parse

AUTHOR = Actor("Test", "test@example.com")


def _init_repo(path: Path, commit: bool = True) -> Repo:
    repo = Repo.init(path)
    if commit:
        (path / "README.md").write_text("hello\n")
        repo.index.add(["README.md"])
        repo.index.commit("initial", author=AUTHOR, committer=AUTHOR)
    return repo


# --- Formatting ---


def test_format_midnight():
    now = datetime(2006, 1, 2, 0, 0, 0, tzinfo=timezone.utc)
    assert format_synthetic_version(42, "68cdd17", now) == "42.060102.0-H68cdd17"


def test_format_drops_leading_zero_of_time():
    now = datetime(2006, 1, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
    assert format_synthetic_version(42, "68cdd17", now) == "42.060102.304-H68cdd17"


def test_format_afternoon():
    now = datetime(2026, 10, 16, 15, 30, tzinfo=timezone.utc)
    version = format_synthetic_version(3, "abcdef0", now)
    assert version == "3.261016.1530-Habcdef0"
    assert parse(version).patch == 1530


def test_format_minutes_only():
    now = datetime(2026, 10, 16, 0, 7, tzinfo=timezone.utc)
    assert format_synthetic_version(1, "abc", now) == "1.261016.7-Habc"


# --- Generation from a repository ---


def test_generate_from_commit_uses_short_head(monkeypatch):
    class FakeRepo:
        def close(self):
            pass

    monkeypatch.setattr(generate, "open_repository", lambda path: FakeRepo())
    monkeypatch.setattr(generate, "head_commit_hash", lambda repo, short: "68cdd17")

    now = datetime(2006, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert generate_from_commit(42, "/some/repo", now) == "42.060102.304-H68cdd17"


def test_generate_from_real_repo():
    with tempfile.TemporaryDirectory() as tmpdir:
        repo = _init_repo(Path(tmpdir))
        full = repo.head.commit.hexsha
        repo.close()

        now = datetime(2026, 10, 16, 9, 45, tzinfo=timezone.utc)
        version = generate_from_commit(7, tmpdir, now)
        assert version == f"7.261016.945-H{full[:7]}"


def test_generate_from_subdirectory():
    with tempfile.TemporaryDirectory() as tmpdir:
        _init_repo(Path(tmpdir)).close()
        sub = Path(tmpdir) / "nested"
        sub.mkdir()
        assert "-H" in generate_from_commit(1, sub)


def test_generate_fails_outside_repo():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(VersionGenerationError) as exc:
            generate_from_commit(1, Path(tmpdir) / "missing")
        assert "Failed to open repository" in str(exc.value)
        assert isinstance(exc.value.__cause__, ValueError)


def test_generate_fails_without_commits():
    with tempfile.TemporaryDirectory() as tmpdir:
        _init_repo(Path(tmpdir), commit=False).close()
        with pytest.raises(VersionGenerationError) as exc:
            generate_from_commit(1, tmpdir)
        assert "Failed to generate version" in str(exc.value)


# --- Git helpers ---


def test_head_commit_hash_short_and_long():
    with tempfile.TemporaryDirectory() as tmpdir:
        _init_repo(Path(tmpdir)).close()
        repo = open_repository(tmpdir)
        full = head_commit_hash(repo)
        short = head_commit_hash(repo, short=True)
        repo.close()
        assert len(full) == 40
        assert short == full[:7]


# --- Calendar dates ---


def test_extract_long_date():
    assert extract_calendar_date("1.20240315.0") == "2024-03-15"


def test_extract_long_date_from_version_object():
    assert extract_calendar_date(parse("2.20061231.5-Habc")) == "2006-12-31"


def test_extract_short_date_from_synthetic_version():
    version = format_synthetic_version(42, "abc1234", datetime(2026, 10, 16, 12, 0))
    assert extract_calendar_date(version, layout=DateLayout.SHORT) == "2026-10-16"


def test_extract_short_date_restores_leading_zero():
    # A 2010 date parses with minor 100102; 2005 dates cannot be parsed at all.
    assert extract_calendar_date("1.100102.0", layout=DateLayout.SHORT) == "2010-01-02"
    assert extract_calendar_date(parse("1.50102.0"), layout=DateLayout.SHORT) == "2005-01-02"


def test_extract_long_date_rejects_synthetic_version():
    with pytest.raises(ValueError):
        extract_calendar_date("42.261016.304-H68cdd17")


def test_extract_rejects_short_minor():
    with pytest.raises(ValueError):
        extract_calendar_date("1.2.3")


def test_extract_short_rejects_long_minor():
    with pytest.raises(ValueError):
        extract_calendar_date("1.20240315.0", layout=DateLayout.SHORT)


def test_extract_rejects_impossible_date():
    with pytest.raises(ValueError):
        extract_calendar_date("1.20241399.0")


def test_extract_short_date_from_2000s_synthetic_string():
    version = format_synthetic_version(42, "68cdd17", datetime(2006, 1, 2, 0, 0))
    assert version == "42.060102.0-H68cdd17"
    assert extract_calendar_date(version, layout=DateLayout.SHORT) == "2006-01-02"


def test_extract_long_date_still_rejects_2000s_synthetic_string():
    with pytest.raises(ValueError):
        extract_calendar_date("42.060102.0-H68cdd17")
