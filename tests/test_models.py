"""Tests for the data model and the editor table."""

from __future__ import annotations

import pytest

from idefiles.editors import EDITOR_PROFILES, FAMILY_NONE, EditorKind, profile_for
from idefiles.models import DetectionOutcome, FileRecord, ProcessSnapshot, normalize_path


class TestFileRecord:
    """File records."""

    def test_for_path(self) -> None:
        record = FileRecord.for_path("/home/u/proj/./src/../main.go", is_active=True, tab_index=2)
        assert record.path == "/home/u/proj/main.go"
        assert record.display_name == "main.go"
        assert record.is_active is True
        assert record.is_modified is False
        assert record.tab_index == 2

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError):
            FileRecord.for_path("")
        with pytest.raises(ValueError):
            FileRecord(path="", display_name="x")

    def test_relative_path_untouched(self) -> None:
        assert normalize_path("src/../main.go") == "src/../main.go"

    def test_to_dict(self) -> None:
        record = FileRecord.for_path("/p/a.py", owning_project_name="p")
        assert record.to_dict() == {
            "path": "/p/a.py",
            "name": "a.py",
            "is_active": False,
            "is_modified": False,
            "tab_index": None,
            "project_name": "p",
        }


class TestDetectionOutcome:
    """Outcomes."""

    def test_to_dict(self) -> None:
        outcome = DetectionOutcome(
            timestamp="2024-01-01T00:00:00+00:00",
            editor_display_name="GoLand",
            open_files=(FileRecord.for_path("/p/a.go", is_active=True),),
            active_file_path="/p/a.go",
            project_path="/p",
        )
        data = outcome.to_dict()
        assert data["editor"] == "GoLand"
        assert data["active_file"] == "/p/a.go"
        assert data["editor_version"] is None
        assert data["project_path"] == "/p"
        assert [f["path"] for f in data["open_files"]] == ["/p/a.go"]


class TestProcessSnapshot:
    """Lazy process details."""

    def test_fetchers(self) -> None:
        process = ProcessSnapshot(
            pid=7, process_name="vim",
            cmdline_fetcher=lambda pid: ["vim", str(pid)],
            cwd_fetcher=lambda pid: "/tmp",
        )
        assert process.cmdline() == ["vim", "7"]
        assert process.cwd() == "/tmp"

    def test_failing_fetcher(self) -> None:
        def _denied(pid: int) -> list[str]:
            raise PermissionError(pid)

        process = ProcessSnapshot(pid=7, process_name="vim", cmdline_fetcher=_denied)
        assert process.cmdline() is None
        assert process.cwd() is None

    def test_equality_ignores_fetchers(self) -> None:
        assert ProcessSnapshot(1, "vim", cmdline_fetcher=lambda pid: []) == ProcessSnapshot(1, "vim")


class TestEditorKind:
    """Editor identities."""

    def test_keys(self) -> None:
        assert [k.key for k in EditorKind] == [
            "goland", "pycharm", "idea", "webstorm", "phpstorm", "rubymine",
            "clion", "vscode", "vs", "vim", "nano",
        ]

    @pytest.mark.parametrize("key,kind", [
        ("goland", EditorKind.GOLAND),
        ("IDEA", EditorKind.INTELLIJ_IDEA),
        (" VSCode ", EditorKind.VSCODE),
    ])
    def test_from_key(self, key: str, kind: EditorKind) -> None:
        assert EditorKind.from_key(key) is kind

    def test_unknown_key(self) -> None:
        assert EditorKind.from_key("emacs") is None

    def test_display_names(self) -> None:
        assert EditorKind.INTELLIJ_IDEA.display_name == "IntelliJ IDEA"
        assert EditorKind.VSCODE.display_name == "Visual Studio Code"

    def test_every_kind_has_profile(self) -> None:
        assert [p.kind for p in EDITOR_PROFILES] == list(EditorKind)
        assert profile_for(EditorKind.VISUAL_STUDIO).family == FAMILY_NONE
        assert profile_for(EditorKind.VISUAL_STUDIO).binary_names == ()
        assert "goland64.exe" in profile_for(EditorKind.GOLAND).binary_names
