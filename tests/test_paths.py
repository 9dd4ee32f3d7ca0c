"""Tests for logsink/paths.py: path splitting and backup discovery."""

import os
from unittest import mock

import pytest

from logsink.paths import find_backups, join_log_name, split_log_path


class TestSplitLogPath:
    def test_name_with_extension(self):
        assert split_log_path("/var/log/app.log") == ("/var/log", "app", "log")

    def test_name_without_extension(self):
        assert split_log_path("/var/log/app") == ("/var/log", "app", "")

    def test_only_last_extension_is_split(self):
        assert split_log_path("/var/log/app.log.3") == ("/var/log", "app.log", "3")

    def test_relative_name_has_empty_parent(self):
        assert split_log_path("app.log") == ("", "app", "log")

    def test_dot_file_keeps_full_name_as_stem(self):
        parent, stem, ext = split_log_path("/home/u/.history")
        assert (parent, stem, ext) == ("/home/u", ".history", "")

    @pytest.mark.parametrize("path", ["/var/log/app.log", "/tmp/data", "x.tar.gz"])
    def test_stem_and_ext_rebuild_name(self, path):
        _, stem, ext = split_log_path(path)
        assert join_log_name(stem, ext) == os.path.basename(path)

    def test_empty_path_fails(self):
        with pytest.raises(ValueError):
            split_log_path("")

    def test_directory_path_fails(self):
        with pytest.raises(ValueError):
            split_log_path("/var/log/")


class TestJoinLogName:
    def test_skips_empty_parts(self):
        assert join_log_name("app", "", "1") == "app.1"

    def test_joins_all_parts(self):
        assert join_log_name("app", "log", "20250115") == "app.log.20250115"


class TestFindBackups:
    def _touch(self, directory, name):
        (directory / name).write_text("")

    def test_returns_suffixed_files_sorted(self, tmp_path):
        for name in ("app.log", "app.log.20250116", "app.log.20250115", "other.log.1"):
            self._touch(tmp_path, name)

        result = find_backups(str(tmp_path / "app.log"))

        assert result == [
            str(tmp_path / "app.log.20250115"),
            str(tmp_path / "app.log.20250116"),
        ]

    def test_prefix_sharing_names_also_match(self, tmp_path):
        self._touch(tmp_path, "app.log.old-notes")
        assert find_backups(str(tmp_path / "app.log")) == [str(tmp_path / "app.log.old-notes")]

    def test_glob_characters_in_path_are_literal(self, tmp_path):
        self._touch(tmp_path, "app[1].log.1")
        self._touch(tmp_path, "app1.log.1")
        assert find_backups(str(tmp_path / "app[1].log")) == [str(tmp_path / "app[1].log.1")]

    def test_empty_directory(self, tmp_path):
        assert find_backups(str(tmp_path / "app.log")) == []

    def test_unreadable_entry_is_skipped_with_warning(self, tmp_path, caplog):
        self._touch(tmp_path, "app.log.1")
        self._touch(tmp_path, "app.log.2")
        bad = str(tmp_path / "app.log.1")
        real_lstat = os.lstat

        def lstat(entry, *args, **kwargs):
            if entry == bad:
                raise OSError("stale handle")
            return real_lstat(entry, *args, **kwargs)

        with mock.patch("logsink.paths.os.lstat", side_effect=lstat):
            with caplog.at_level("WARNING", logger="logsink.paths"):
                result = find_backups(str(tmp_path / "app.log"))

        assert result == [str(tmp_path / "app.log.2")]
        assert "app.log.1" in caplog.text
        assert caplog.records[0].levelname == "WARNING"
