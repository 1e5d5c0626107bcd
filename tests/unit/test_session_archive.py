import json
import stat
import zipfile

import pytest

from clawapi.core.errors import SessionArchiveError
from clawapi.core.session.archive import archive_name, export_session, import_session
from tests.conftest import TEST_USER_AGENT


@pytest.mark.unit
class TestExport:
    def test_archive_holds_exactly_the_session_files(self, authenticated_claude, tmp_path):
        archive = export_session(authenticated_claude, "claude", tmp_path / "out")

        assert archive.name == archive_name("claude") == "claude_session.zip"
        with zipfile.ZipFile(archive) as zf:
            assert sorted(zf.namelist()) == ["claude/cookies.json", "claude/userAgent.txt"]

    def test_no_session_is_an_error(self, session_store, tmp_path):
        with pytest.raises(SessionArchiveError, match="No session files"):
            export_session(session_store, "claude", tmp_path)


@pytest.mark.unit
class TestImport:
    def test_roundtrip_preserves_session(
        self, authenticated_claude, installs, claude_cookies, tmp_path
    ):
        archive = export_session(authenticated_claude, "claude", tmp_path)
        authenticated_claude.clear("claude")
        installs.set_uninstalled("claude")

        count = import_session(authenticated_claude, installs, "claude", archive)

        assert count == 2
        assert authenticated_claude.validate("claude") is True
        assert authenticated_claude.read_cookies("claude") == claude_cookies
        credentials = authenticated_claude.load("claude")
        assert "sessionKey=sk-ant-sid01-test" in credentials.cookie_header
        assert credentials.user_agent == TEST_USER_AGENT
        assert installs.is_installed("claude") is True

    def test_imported_cookies_are_owner_only(
        self, session_store, installs, claude_cookies, tmp_path
    ):
        archive = tmp_path / "session.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("claude/cookies.json", json.dumps(claude_cookies))

        import_session(session_store, installs, "claude", archive)

        cookie_path = session_store.session_dir("claude") / "cookies.json"
        assert stat.S_IMODE(cookie_path.stat().st_mode) & 0o077 == 0

    def test_ignores_foreign_and_traversal_members(
        self, session_store, installs, claude_cookies, tmp_path
    ):
        archive = tmp_path / "crafted.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("claude/cookies.json", json.dumps(claude_cookies))
            zf.writestr("claude/../../escape.txt", "nope")
            zf.writestr("gemini/cookies.json", "[]")
            zf.writestr("claude/extra.txt", "ignored")

        assert import_session(session_store, installs, "claude", archive) == 1

        session_dir = session_store.session_dir("claude")
        assert sorted(p.name for p in session_dir.iterdir()) == ["cookies.json"]
        assert not (tmp_path / "escape.txt").exists()

    def test_replaces_prior_session(self, authenticated_claude, installs, tmp_path):
        archive = tmp_path / "cookies-only.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("claude/cookies.json", json.dumps([{"name": "sessionKey", "value": "new"}]))

        import_session(authenticated_claude, installs, "claude", archive)

        assert authenticated_claude.read_user_agent("claude") is None
        assert authenticated_claude.load("claude").cookie_header == "sessionKey=new"

    def test_invalid_session_is_removed(self, session_store, installs, tmp_path):
        archive = tmp_path / "tracking-only.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("claude/cookies.json", json.dumps([{"name": "_ga", "value": "1"}]))

        with pytest.raises(SessionArchiveError, match="missing or invalid"):
            import_session(session_store, installs, "claude", archive)

        assert not session_store.session_dir("claude").exists()
        assert installs.is_installed("claude") is False

    def test_corrupt_archive(self, session_store, installs, tmp_path):
        archive = tmp_path / "broken.zip"
        archive.write_bytes(b"this is not a zip file")

        with pytest.raises(SessionArchiveError, match="Failed to import"):
            import_session(session_store, installs, "claude", archive)

    def test_missing_archive(self, session_store, installs, tmp_path):
        with pytest.raises(SessionArchiveError, match="Cannot find"):
            import_session(session_store, installs, "claude", tmp_path / "absent.zip")
