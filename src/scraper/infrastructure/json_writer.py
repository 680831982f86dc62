import json
from pathlib import Path
from typing import Any, Sequence

from pathvalidate import sanitize_filename as lib_sanitize


def make_output_filename(name: str) -> str:
    safe_name = lib_sanitize(name, replacement_text="_")
    if not safe_name:
        safe_name = "output"
    return f"{safe_name}.json"


class JsonOutputWriter:
    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    def write(self, records: Sequence[Any], name: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / make_output_filename(name)
        payload = [r.to_dict() if hasattr(r, "to_dict") else r for r in records]
        with file_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        return file_path
