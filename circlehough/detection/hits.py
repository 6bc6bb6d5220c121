"""Circle hypothesis value type and ranking helpers."""

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True, order=False)
class CircleHit:
    """A circle hypothesis: center (x, y), radius r and its vote count."""
    x: int
    y: int
    r: int
    votes: int
    
    def __lt__(self, other: "CircleHit") -> bool:
        return self.votes < other.votes
    
    def bounding_box(self) -> Tuple[int, int, int, int]:
        """Return (left, top, width, height) of the circle's bounding square."""
        return (self.x - self.r, self.y - self.r, self.r * 2, self.r * 2)
    
    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
    
    def __str__(self) -> str:
        return f"x={self.x:2d} y={self.y:2d} r={self.r:2d} votes={self.votes:2d}"


def sort_hits(hits: Iterable[CircleHit]) -> List[CircleHit]:
    """Sort hits by votes, strongest first; ties keep discovery order."""
    return sorted(hits, key=lambda hit: hit.votes, reverse=True)


def top_hits(hits: Iterable[CircleHit], n: Optional[int]) -> List[CircleHit]:
    """Return the n strongest hits (all of them when n is None)."""
    ranked = sort_hits(hits)
    return ranked if n is None else ranked[:n]


def suppress_concentric(hits: Iterable[CircleHit], center_tolerance: int = 2,
                        radius_tolerance: int = 2) -> List[CircleHit]:
    """
    Drop near-duplicate circles.
    
    Hits are visited strongest first. A hit is discarded when an already
    kept hit has a center within center_tolerance pixels (per axis) and a
    radius within radius_tolerance.
    
    Args:
        hits: Candidate hits, any order
        center_tolerance: Maximum center offset per axis
        radius_tolerance: Maximum radius difference
        
    Returns:
        Kept hits, sorted by votes descending
    """
    kept = []
    for hit in sort_hits(hits):
        duplicate = any(
            abs(hit.x - other.x) <= center_tolerance
            and abs(hit.y - other.y) <= center_tolerance
            and abs(hit.r - other.r) <= radius_tolerance
            for other in kept
        )
        if not duplicate:
            kept.append(hit)
    return kept
