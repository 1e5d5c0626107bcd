"""Portable session archives.

An archive holds exactly the cookie collection and user-agent file of one
provider, stored under ``<provider>/`` inside a zip file, so a session
captured on one machine can be replayed on another.
"""

import logging
import os
import zipfile
from pathlib import Path

from clawapi.core.errors import SessionArchiveError, SessionError
from clawapi.core.session.installation import InstallationState
from clawapi.core.session.store import (
    COOKIES_FILE,
    SESSION_FILE_PERMISSIONS,
    SESSION_FILES,
    SessionStore,
)

_logger = logging.getLogger(__name__)


def archive_name(provider: str) -> str:
    return f"{provider}_session.zip"


def export_session(store: SessionStore, provider: str, output_dir: Path) -> Path:
    """Write ``<provider>_session.zip`` into ``output_dir``.

    Args:
        store: Session store holding the provider's artifact
        provider: Registry name of the provider
        output_dir: Directory receiving the archive

    Returns:
        Path of the written archive

    Raises:
        SessionArchiveError: If no session files exist or the write fails
    """
    session_dir = store.session_dir(provider)
    present = [name for name in SESSION_FILES if (session_dir / name).is_file()]
    if not present:
        raise SessionArchiveError(f"No session files found for '{provider}' in {session_dir}")

    archive_path = output_dir / archive_name(provider)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name in present:
                zf.write(session_dir / name, arcname=f"{provider}/{name}")
    except OSError as e:
        raise SessionArchiveError(f"Failed to export session for '{provider}': {e}") from e

    _logger.info("Exported %d session files for '%s' to %s", len(present), provider, archive_path)
    return archive_path


def import_session(
    store: SessionStore,
    installs: InstallationState,
    provider: str,
    archive_path: Path,
) -> int:
    """Replace the provider's session with the contents of an archive.

    Any prior session is removed before extraction. Only the
    ``<provider>/cookies.json`` and ``<provider>/userAgent.txt`` members
    are extracted; everything else in the archive is ignored. The imported
    session must validate, otherwise it is removed again.

    Returns:
        Number of files imported

    Raises:
        SessionArchiveError: If the archive is unreadable, lacks session
            files, or the imported session does not qualify
    """
    if not archive_path.is_file():
        raise SessionArchiveError(f"Cannot find export file: {archive_path}")

    wanted = {f"{provider}/{name}": name for name in SESSION_FILES}

    try:
        store.clear(provider)
    except SessionError as e:
        raise SessionArchiveError(f"Could not clean old session for '{provider}': {e}") from e

    session_dir = store.session_dir(provider)
    imported = 0
    try:
        with zipfile.ZipFile(archive_path) as zf:
            for member in zf.infolist():
                target_name = wanted.get(member.filename)
                if target_name is None or member.is_dir():
                    continue
                session_dir.mkdir(parents=True, exist_ok=True)
                with open(session_dir / target_name, "wb") as f:
                    if target_name == COOKIES_FILE and hasattr(os, "fchmod"):
                        os.fchmod(f.fileno(), SESSION_FILE_PERMISSIONS)
                    f.write(zf.read(member))
                imported += 1
    except (zipfile.BadZipFile, OSError) as e:
        store.clear(provider)
        raise SessionArchiveError(f"Failed to import session for '{provider}': {e}") from e

    if not store.validate(provider):
        store.clear(provider)
        raise SessionArchiveError(
            f"Import completed but the session for '{provider}' is missing or invalid."
        )

    installs.set_installed(provider)
    _logger.info("Imported %d session files for '%s'", imported, provider)
    return imported
