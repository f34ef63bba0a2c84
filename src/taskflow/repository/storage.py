# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Any, Protocol, TypeAlias

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

logger = logging.getLogger(__name__)

FieldSet: TypeAlias = dict[str, Any]


class TaskStorage(Protocol):
    def load(self) -> list[FieldSet]: ...

    def save(self, field_sets: list[FieldSet]) -> None: ...


class YamlTaskStorage:
    """
    Keep the whole collection in a single YAML document.

    The document is a mapping with one ``tasks`` key holding the field-sets in
    storage order.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[FieldSet]:
        if not self.path.is_file():
            return []
        raw = load(self.path.read_text(encoding="utf-8"), Loader=Loader)
        if raw is None:
            return []
        field_sets = raw.get("tasks") if isinstance(raw, dict) else None
        if not field_sets:
            return []
        logger.debug("Loaded %s tasks from %s", len(field_sets), self.path)
        return list(field_sets)

    def save(self, field_sets: list[FieldSet]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".yaml.tmp")
        tmp_path.write_text(
            dump(
                {"tasks": field_sets},
                Dumper=Dumper,
                sort_keys=False,
                allow_unicode=True,
            ),
            encoding="utf-8",
        )
        tmp_path.replace(self.path)
        logger.debug("Saved %s tasks to %s", len(field_sets), self.path)
