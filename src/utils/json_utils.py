"""
JSON document helpers for the file-backed metadata store.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json_document(path: Path) -> Any:
    """Load a JSON document from disk.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json_atomic(path: Path, data: Any) -> None:
    """Replace ``path`` with ``data`` serialized as JSON.

    The document is written to a temporary file in the same directory and
    moved into place with ``os.replace`` so readers never observe a partially
    written file.

    Raises:
        OSError: If the document cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
