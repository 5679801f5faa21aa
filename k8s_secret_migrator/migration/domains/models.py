"""Domain models for secret migration."""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Mapping


class MigrationMode(Enum):
    """What to do with each destination secret."""
    CREATE = "create"
    DELETE = "delete"


@dataclass(frozen=True)
class SourceSecret:
    """A Kubernetes secret with its decoded data entries."""
    name: str
    namespace: str
    data: Mapping[str, bytes] = field(default_factory=dict)


@dataclass(frozen=True)
class MigrationContext:
    """Per-run settings, built once and passed through the workflow."""
    namespace: str
    project: str
    exclusions: FrozenSet[str] = frozenset()
    mode: MigrationMode = MigrationMode.CREATE


@dataclass(frozen=True)
class MigrationRecord:
    """One processed (secret, data key) pair."""
    source_name: str
    destination_name: str
    project: str
    namespace: str
    data_key: str
    action: str  # "create" or "delete"

    def to_row(self) -> str:
        return (
            f"{self.source_name},{self.destination_name},{self.project},"
            f"{self.namespace},\"{self.data_key}\""
        )


@dataclass
class RunReport:
    """Records produced by a single run."""
    records: List[MigrationRecord] = field(default_factory=list)
    processed_names: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    def add(self, record: MigrationRecord) -> None:
        self.records.append(record)
        self.processed_names.append(record.destination_name)
