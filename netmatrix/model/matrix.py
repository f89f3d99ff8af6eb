from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class CellValue:
    avg_latency: Optional[float] = None
    tcp_bitrate: Optional[float] = None
    udp_bitrate: Optional[float] = None


empty_cell = CellValue()


@dataclass
class Matrix:
    sources: List[str] = field(default_factory=list)
    targets: List[str] = field(default_factory=list)
    cells: Dict[Tuple[str, str], CellValue] = field(default_factory=dict)

    def get(self, source: str, target: str) -> Optional[CellValue]:
        return self.cells.get((source, target))

    def rows(self) -> Iterator[Tuple[str, List[Optional[CellValue]]]]:
        """
        Iterates over the matrix row by row in source order, each row holding one entry per target (None if the
        cell is missing).
        """
        for source in self.sources:
            yield source, [self.get(source, target) for target in self.targets]

    def is_empty(self) -> bool:
        return not self.sources or not self.targets
