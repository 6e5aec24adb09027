"""JSON file storage with Result-based error handling.

A thin wrapper around file I/O for JSON documents. It knows nothing
about projects or tasks - repositories build on top of it.
"""

import json
import os
from pathlib import Path
from typing import Any

from taskflow.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Low-level JSON file I/O that returns Results instead of raising.

    Writes go to a temporary sibling file first and are then moved into
    place, so a crash never leaves a half-written document behind.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("tasks.json"), default={"tasks": []})
        if isinstance(result, Ok):
            data = result.value
    """

    def load_json(self, path: Path, default: Any = None) -> Result[Any, str]:
        """Load JSON data from a file.

        Args:
            path: Path to the JSON file to read.
            default: Value returned (as Ok) when the file does not exist.
                When None, a missing file is an error.

        Returns:
            Ok(data) if successful, Err(str) with error message if failed.
        """
        try:
            if not path.exists():
                if default is not None:
                    return Ok(default)
                return Err(f"File not found: {path}")

            content = path.read_text(encoding="utf-8")
            return Ok(json.loads(content))

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(self, path: Path, data: Any, indent: int = 2) -> Result[None, str]:
        """Atomically write JSON data to a file.

        Args:
            path: Path to the JSON file to write.
            data: JSON-serializable value.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=indent), encoding="utf-8")
            os.replace(tmp_path, path)
            return Ok(None)

        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")
        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
