"""Plain-text rule files.

Keeps long block lists out of config.json: one pattern per line in
``playerlist.txt`` (author names) and ``messagelist.txt`` (message regexes).
"""

from __future__ import annotations

import logging
import os
from typing import Tuple

LOGGER = logging.getLogger(__name__)

PLAYER_LIST_FILE = "playerlist.txt"
MESSAGE_LIST_FILE = "messagelist.txt"


class RuleFiles:
    """Reads name and message patterns from a rules directory."""

    def __init__(self, directory: str) -> None:
        self._directory = directory

    @property
    def player_list_path(self) -> str:
        return os.path.join(self._directory, PLAYER_LIST_FILE)

    @property
    def message_list_path(self) -> str:
        return os.path.join(self._directory, MESSAGE_LIST_FILE)

    def init_files(self) -> None:
        """Create the directory and empty list files if they do not exist."""

        os.makedirs(self._directory, exist_ok=True)
        for path in (self.player_list_path, self.message_list_path):
            if os.path.exists(path):
                continue
            try:
                with open(path, "a", encoding="utf-8"):
                    pass
            except OSError:
                LOGGER.error("Unable to create rule file %s", path)

    def _read(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return handle.read()
        except FileNotFoundError:
            LOGGER.error("Rule file not found: %s", path)
        except OSError:
            LOGGER.exception("Unable to read rule file %s", path)
        return ""

    def read(self) -> Tuple[str, str]:
        """Return the (names, messages) blobs, newline separated."""

        names = self._read(self.player_list_path)
        messages = self._read(self.message_list_path)
        LOGGER.info(
            "Loaded %s player patterns and %s message patterns from %s",
            sum(1 for line in names.splitlines() if line.strip()),
            sum(1 for line in messages.splitlines() if line.strip()),
            self._directory,
        )
        return names, messages


def merge_blobs(*blobs: str) -> str:
    """Join newline-separated rule blobs, skipping empty ones."""

    return "\n".join(blob.strip("\n") for blob in blobs if blob and blob.strip())
