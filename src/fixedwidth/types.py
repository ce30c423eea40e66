from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .engine.record import Record

Row = Dict[str, Any]
Reader = Callable[["Record"], Any]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    length: int
    format: Optional[str] = None
    default: Any = None
    reader: Optional[Reader] = field(default=None, compare=False)
    truncate: bool = False


@dataclass
class RecordResult:
    row: Optional[Row]
    error: Optional[Exception]
    warnings: List[str] = field(default_factory=list)
