"""
Changelog parsing and version diffing.

The changelog is a markdown document whose version sections start with a
level-2 heading (``## 1.2.3``) and are listed newest first.
"""

import re
from typing import List, Optional

import structlog

from monitor.models import VersionEntry

logger = structlog.get_logger(__name__)

VERSION_HEADING_RE = re.compile(r"^## (\d+\.\d+(?:\.\d+)?(?:-[\w.]+)?)")


def parse_changelog(markdown: str) -> List[VersionEntry]:
    """
    Parse changelog markdown into version entries.

    Args:
        markdown: Raw changelog text

    Returns:
        Version entries in document order (newest first)
    """
    entries: List[VersionEntry] = []
    current_version: Optional[str] = None
    current_content: List[str] = []

    for line in markdown.split("\n"):
        match = VERSION_HEADING_RE.match(line)

        if match:
            if current_version is not None:
                entries.append(VersionEntry(
                    version=current_version,
                    content="\n".join(current_content).strip()
                ))
            current_version = match.group(1)
            current_content = []
        elif current_version is not None:
            current_content.append(line)

    if current_version is not None:
        entries.append(VersionEntry(
            version=current_version,
            content="\n".join(current_content).strip()
        ))

    return entries


def get_new_versions(entries: List[VersionEntry], last_seen_version: str) -> List[VersionEntry]:
    """
    Get the entries newer than the last seen version.

    An unknown last seen version yields nothing rather than the whole history.

    Args:
        entries: Parsed entries, newest first
        last_seen_version: Checkpointed version

    Returns:
        Entries above the checkpoint, newest first
    """
    last_seen_index = next(
        (index for index, entry in enumerate(entries) if entry.version == last_seen_version),
        None
    )

    if last_seen_index is None:
        logger.warning(
            "Last seen version not found in changelog, treating as first run",
            last_seen_version=last_seen_version
        )
        return []

    return entries[:last_seen_index]
