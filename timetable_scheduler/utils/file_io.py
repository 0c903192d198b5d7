import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel

def load_json_file(filepath: Union[str, Path], entity_name: str = "JSON file") -> Optional[Any]:
    """Loads a JSON file with comprehensive error handling."""
    path = Path(filepath)
    if not path.exists():
        print(f"ERROR: Cannot load {entity_name}. File not found at: {path}")
        return None
    try:
        with open(path, "r", encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        print(f"ERROR: Failed to decode {entity_name} from {path}: {e}")
        return None
    except OSError as e:
        print(f"ERROR: Unexpected error loading {entity_name} from {path}: {e}")
        return None

def _json_default(obj: Any) -> Any:
    """Serializes pydantic models by alias (camelCase keys) and paths as strings."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

def save_json_file(filepath: Union[str, Path], data: Any, entity_name: str = "JSON file") -> bool:
    """Saves data (plain JSON values or pydantic models) to a JSON file."""
    try:
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding='utf-8') as f:
            json.dump(data, f, indent=4, default=_json_default)
        return True
    except (OSError, TypeError, ValueError) as e:
        print(f"ERROR: Failed to save {entity_name} to {filepath}: {e}")
        return False
