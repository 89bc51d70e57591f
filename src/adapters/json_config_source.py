"""JSON config adapter.

Implements the core ConfigSourcePort on top of config.json, optionally
extending the rule lists with the plain-text rule files.
"""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Optional

import settings
from adapters.file_rules_source import RuleFiles, merge_blobs
from core.config import FilterConfig

LOGGER = logging.getLogger(__name__)


class JsonConfigSource:
    """Re-reads config.json on every ``load`` so edits apply on reload."""

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = path or settings.CONFIG_PATH
        self.raw: dict = {}

    def load(self) -> FilterConfig:
        self.raw = settings.load_json_config(self._path)
        LOGGER.debug("Loaded config from %s", self._path)
        config = settings.build_filter_config(self.raw)

        directory = settings.rules_dir(self.raw)
        if not directory:
            return config

        rule_files = RuleFiles(directory)
        rule_files.init_files()
        names, messages = rule_files.read()
        return replace(
            config,
            filtered_names=merge_blobs(config.filtered_names, names),
            filtered_regex=merge_blobs(config.filtered_regex, messages),
        )

