"""
Storage utility.

File I/O helpers for pipeline artifacts: record arrays, frequency tables,
rule snapshots and cluster reports.
"""

import json
import logging
import os
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def write_json(path: str, data: Any) -> None:
    """
    Write data as indented UTF-8 JSON using a temp file + rename.

    Parent directories are created as needed.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    temp_path = f"{path}.tmp"
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(temp_path, path)
    except Exception as e:
        logger.error(f"Failed to write {path}: {e}")
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class StorageManager:
    """
    Manages file I/O for one output directory.

    Handles:
    - Record arrays (IVIS23_final.json)
    - Frequency tables (hobby_area_counts.json, hobby_counts.json)
    - Rule snapshots (hobby_area_rules.json)
    - Derived reports (rating averages, cluster reports)
    """

    def __init__(self, output_dir: str):
        """
        Initialize storage manager.

        Args:
            output_dir: Directory receiving all artifacts of a run
        """
        self.output_dir = str(output_dir)
        os.makedirs(self.output_dir, exist_ok=True)
        logger.info(f"Initialized StorageManager with output_dir={self.output_dir}")

    def path_for(self, filename: str) -> str:
        return os.path.join(self.output_dir, filename)

    def save(self, filename: str, data: Any) -> str:
        """
        Save an artifact into the output directory.

        Returns:
            Full path of the written file
        """
        path = self.path_for(filename)
        write_json(path, data)
        size = f"{len(data)} entries" if isinstance(data, (list, dict)) else "1 document"
        logger.info(f"Wrote {path} ({size})")
        return path

    def save_records(self, records: List[Dict], filename: str) -> str:
        return self.save(filename, records)
