from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import json

@dataclass(frozen=True)
class FetchJob:
    """One (address, chain) request, from the CLI or a batch file row"""
    address: str
    chain: str

@dataclass(frozen=True)
class SourceFile:
    """
    Normalized source file, the unit written by the sink.
    
    `path` is relative and already namespaced by address
    (`<address>/<original path>`). `placeholders` names every field that was
    missing from the explorer response and replaced with sentinel text.
    """
    chain: str
    address: str
    path: str
    content: str
    placeholders: Tuple[str, ...] = ()
    
    @property
    def is_partial(self) -> bool:
        return bool(self.placeholders)
    
    def location(self, base_path: Path) -> 'OutputLocation':
        return OutputLocation(Path(base_path), self.chain, self.path)

@dataclass(frozen=True)
class OutputLocation:
    """Storage key: base / chain / relative path"""
    base_path: Path
    chain: str
    relative_path: str
    
    @property
    def path(self) -> Path:
        return self.base_path / self.chain / self.relative_path

class JobStatus(Enum):
    SAVED = "saved"
    EMPTY = "empty"    # explorer returned nothing usable

@dataclass
class JobOutcome:
    job: FetchJob
    status: JobStatus
    files: List[str] = field(default_factory=list)
    partial_files: int = 0
    
    def to_dict(self) -> dict:
        return {
            'address': self.job.address,
            'chain': self.job.chain,
            'status': self.status.value,
            'files': self.files,
            'partial_files': self.partial_files,
        }

@dataclass
class BatchReport:
    """Per-job outcomes of a batch run, plus the fatal error that stopped it"""
    
    total: int
    outcomes: List[JobOutcome] = field(default_factory=list)
    error: Optional[Dict[str, Any]] = None
    
    @property
    def completed(self) -> int:
        return len(self.outcomes)
    
    @property
    def aborted(self) -> bool:
        return self.error is not None
    
    def count(self, status: JobStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)
    
    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'completed': self.completed,
            'saved': self.count(JobStatus.SAVED),
            'empty': self.count(JobStatus.EMPTY),
            'aborted': self.aborted,
            'error': self.error,
            'outcomes': [o.to_dict() for o in self.outcomes],
        }
    
    def save(self, output_file: Path):
        """Save report as JSON"""
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
