"""JSON file persistence for player characters."""

import copy
import json
import logging
import os
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class GameStore:
    """Characters keyed by Discord user id, kept in memory and written through.

    The file is read once when the store is created; every mutation saves the
    whole document. When the main file can't be written the data goes to a
    `<name>_backup.json` file next to it instead.
    """

    def __init__(self, path: str):
        self.path = path
        root, ext = os.path.splitext(path)
        self.backup_path = f"{root}_backup{ext or '.json'}"
        self.data = self._load()

    def _load(self) -> Dict:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No data file at %s, starting empty", self.path)
            return {'characters': {}}
        except json.JSONDecodeError:
            logger.error("Invalid JSON in %s, trying backup", self.path)
            data = self._load_backup()
        data.setdefault('characters', {})
        logger.info("Loaded %d characters from %s", len(data['characters']), self.path)
        return data

    def _load_backup(self) -> Dict:
        try:
            with open(self.backup_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            logger.error("No usable backup at %s, starting empty", self.backup_path)
            return {'characters': {}}

    def save(self) -> bool:
        """Write the data file; returns False when only the backup was written."""
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, ensure_ascii=False)
            return True
        except OSError as e:
            logger.error("Error saving %s: %s", self.path, e)

        with open(self.backup_path, 'w', encoding='utf-8') as backup_f:
            json.dump(self.data, backup_f, indent=4, ensure_ascii=False)
        logger.warning("Data saved to backup file %s instead", self.backup_path)
        return False

    @property
    def characters(self) -> Dict[str, Dict]:
        return self.data['characters']

    def get(self, user_id) -> Optional[Dict]:
        return self.characters.get(str(user_id))

    def exists(self, user_id) -> bool:
        return str(user_id) in self.characters

    def put(self, user_id, character: Dict):
        self.characters[str(user_id)] = character
        self.save()

    def delete(self, user_id) -> bool:
        removed = self.characters.pop(str(user_id), None)
        if removed is not None:
            self.save()
        return removed is not None

    def all(self) -> Iterator[Tuple[str, Dict]]:
        """Snapshot of every (user_id, character) pair."""
        return iter([(user_id, copy.deepcopy(character)) for user_id, character in self.characters.items()])

    def __len__(self):
        return len(self.characters)
