"""
Game Database.

Holds static game data (skills, enemy templates, ...) that an external
loader has already parsed, validating every entry against a JSON schema.
"""

import logging
from typing import Any, Iterable, Mapping

import jsonschema


class Database:
    """
    Central storage for static game data.

    Data is grouped by category; each category may carry a schema.
    Entries are keyed by their ``id`` field.
    """

    def __init__(self):
        self._schemas: dict[str, Any] = {}
        self._stores: dict[str, dict[str, dict[str, Any]]] = {}

        self.logger = logging.getLogger(__name__)

    def register_schema(self, category: str, schema: Mapping[str, Any]) -> None:
        """Register the JSON schema used to validate a category."""
        jsonschema.Draft7Validator.check_schema(schema)
        self._schemas[category] = dict(schema)
        self._stores.setdefault(category, {})

    def load_entries(self, category: str, entries: Iterable[Mapping[str, Any]]) -> int:
        """
        Validate and store entries for a category.

        Entries that fail validation are logged and skipped.

        Returns:
            Number of entries stored
        """
        schema = self._schemas.get(category)
        if schema is None:
            self.logger.warning(f"No schema registered for {category}, skipping load")
            return 0

        store = self._stores.setdefault(category, {})
        loaded = 0

        for entry in entries:
            try:
                jsonschema.validate(instance=entry, schema=schema)
            except jsonschema.ValidationError as e:
                entry_id = entry.get('id', '?') if isinstance(entry, Mapping) else '?'
                self.logger.error(f"Validation error in {category}/{entry_id}: {e.message}")
                continue

            if 'id' not in entry:
                self.logger.error(f"Entry without id in {category}, skipping")
                continue

            if entry['id'] in store:
                self.logger.warning(f"Duplicate {category} id '{entry['id']}', replacing")
            store[entry['id']] = dict(entry)
            loaded += 1

        self.logger.info(f"Loaded {loaded} {category}.")
        return loaded

    def get(self, category: str, entry_id: str) -> dict[str, Any] | None:
        return self._stores.get(category, {}).get(entry_id)

    def entries(self, category: str) -> list[dict[str, Any]]:
        """All stored entries of a category, in load order."""
        return list(self._stores.get(category, {}).values())

    def categories(self) -> list[str]:
        return list(self._stores)
