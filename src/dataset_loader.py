"""
Puzzle Dataset Loader

Reads and writes generated truth-teller / liar puzzles in JSON or JSONL format,
validates the standardized question and canonical_answer fields, and converts
them to a HuggingFace dataset.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from datasets import Dataset

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class PuzzleDatasetLoader:
    """Loads, validates and saves puzzle datasets."""

    def __init__(self, output_dir: str = "data"):
        """
        Initialize the puzzle dataset loader.

        Args:
            output_dir: Directory to save processed datasets
        """
        self.output_dir = Path(output_dir)
        self._data = []  # Store loaded data

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: Union[int, slice]) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        return self._data[index]

    def __iter__(self):
        return iter(self._data)

    def load_from_jsonl(self, file_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        Load data from an existing JSONL file.

        Args:
            file_path: Path to the JSONL file

        Returns:
            List of puzzle dictionaries
        """
        file_path = Path(file_path)
        logger.info(f"Loading data from {file_path}")

        try:
            data = []
            with open(file_path, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        data.append(json.loads(line))

            self._data = data
            logger.info(f"Loaded {len(data)} puzzles from {file_path}")
            return data

        except Exception as e:
            logger.error(f"Failed to load JSONL file {file_path}: {e}")
            raise

    def load_data(self, file_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        Load puzzles from a JSON list or a JSONL file, whichever the file holds.

        A JSONL file with a single record is also a valid JSON document, so a
        lone top-level object is read as a one-puzzle dataset.
        """
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.info(f"Detected JSONL format in {file_path}")
            return self.load_from_jsonl(file_path)
        except OSError as e:
            logger.error(f"Failed to load file {file_path}: {e}")
            raise

        if isinstance(data, dict):
            data = [data]
        elif not isinstance(data, list):
            logger.error(f"Unexpected top-level {type(data).__name__} in {file_path}")
            raise ValueError(f"{file_path} holds neither a puzzle list nor puzzle records")

        self._data = data
        logger.info(f"Loaded {len(data)} puzzles from {file_path}")
        return data

    def save_json(self, data: List[Dict[str, Any]], filename: str) -> Path:
        """Save data as a single JSON list inside output_dir."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved {len(data)} puzzles to {output_path}")
            return output_path
        except Exception as e:
            logger.error(f"Failed to save JSON file {output_path}: {e}")
            raise

    def save_jsonl(self, data: List[Dict[str, Any]], filename: str) -> Path:
        """Save data as JSONL (one puzzle per line) inside output_dir."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                for item in data:
                    f.write(json.dumps(item, ensure_ascii=False) + '\n')
            logger.info(f"Saved {len(data)} puzzles to {output_path}")
            return output_path
        except Exception as e:
            logger.error(f"Failed to save JSONL file {output_path}: {e}")
            raise

    def validate_data(self, data: List[Dict[str, Any]]) -> bool:
        """
        Validate that data has the correct format.

        Args:
            data: List of dictionaries to validate

        Returns:
            True if valid, raises ValueError if invalid
        """
        required_fields = {"question", "canonical_answer"}

        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"Item {i} is not a dictionary")

            missing_fields = required_fields - set(item.keys())
            if missing_fields:
                raise ValueError(f"Item {i} missing required fields: {missing_fields}")

            if not isinstance(item["question"], str) or not isinstance(item["canonical_answer"], str):
                raise ValueError(f"Item {i} has non-string question or answer")

        logger.info(f"Validated {len(data)} puzzles successfully")
        return True

    def to_hf_dataset(self) -> Dataset:
        """Convert the loaded puzzles to a HuggingFace dataset (question/answer columns only)."""
        rows = [
            {"question": item["question"], "canonical_answer": item["canonical_answer"]}
            for item in self._data
        ]
        return Dataset.from_list(rows)

