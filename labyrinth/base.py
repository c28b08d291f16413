"""Abstract interfaces for maze dataset generation and solution evaluation."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, Protocol, TypeVar, Union, runtime_checkable

PathLike = Union[str, Path]


@runtime_checkable
class SerializableRecord(Protocol):
    """A record that can be written to the metadata list."""

    id: str

    def to_dict(self) -> Dict[str, Any]:
        ...


RecordT = TypeVar("RecordT", bound=SerializableRecord)


class AbstractPuzzleGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit maze records."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *args, **kwargs) -> RecordT:
        """Create a puzzle from explicit parameters."""

    @abstractmethod
    def create_random_puzzle(self) -> RecordT:
        """Create a single puzzle seeded from the generator's own stream."""

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of puzzles and optionally persist metadata."""

        if count < 0:
            raise ValueError("count must be non-negative")
        records = [self.create_random_puzzle() for _ in range(count)]
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> Path:
        """Serialize records to a JSON list, appending to existing content if requested.

        Evaluators look records up by id, so an id may appear only once per file.
        """

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(existing, list):
                raise ValueError(f"Existing metadata in {path} is not a list of records")
        payload = [self.record_to_dict(record) for record in records]
        seen = set()
        for entry in existing + payload:
            puzzle_id = str(entry.get("id"))
            if puzzle_id in seen:
                raise ValueError(f"Duplicate puzzle id '{puzzle_id}' in {path}")
            seen.add(puzzle_id)
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        return path

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        """Dictionary serialization hook for records."""

        if not isinstance(record, SerializableRecord):
            raise TypeError(
                "Maze record must implement to_dict() or override record_to_dict() in the generator."
            )
        return record.to_dict()


class AbstractPuzzleEvaluator(ABC):
    """Base class scaffolding for evaluators backed by a metadata file."""

    def __init__(self, metadata_path: PathLike) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self._records = self._load_metadata()

    @property
    def records(self) -> Dict[str, Dict[str, Any]]:
        """Return the loaded metadata keyed by puzzle id."""

        return self._records

    def _read_metadata(self) -> List[Dict[str, Any]]:
        raw = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("Puzzle metadata must be a list of records")
        return raw

    def _load_metadata(self) -> Dict[str, Dict[str, Any]]:
        records: Dict[str, Dict[str, Any]] = {}
        for record in self._read_metadata():
            puzzle_id = record.get("id")
            if not puzzle_id:
                raise ValueError("Each puzzle record must include an 'id'")
            if str(puzzle_id) in records:
                raise ValueError(f"Duplicate puzzle id '{puzzle_id}' in metadata")
            records[str(puzzle_id)] = record
        return records

    def get_record(self, puzzle_id: str) -> Dict[str, Any]:
        try:
            return self._records[puzzle_id]
        except KeyError as exc:
            raise KeyError(f"Puzzle id '{puzzle_id}' not found in metadata") from exc

    @abstractmethod
    def evaluate(self, puzzle_id: str, *args, **kwargs):
        """Evaluate a candidate solution for the given puzzle."""


__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "PathLike",
    "SerializableRecord",
]
