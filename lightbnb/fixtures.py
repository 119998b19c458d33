import json
from pathlib import Path
from typing import Dict, Optional, Union

from lightbnb.config import FIXTURES_DIR


def load_fixture(name: str, directory: Optional[Union[str, Path]] = None) -> Dict[str, dict]:
    """Read ``<directory>/<name>.json``, an object of records keyed by id."""
    path = Path(directory or FIXTURES_DIR) / f"{name}.json"
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
