"""Performance metrics and evaluation."""

import numpy as np
from typing import Dict, Iterable, List, Tuple
from time import perf_counter

from circlehough.detection.hits import CircleHit


class PerformanceMetrics:
    """Track per-stage timings."""
    
    def __init__(self):
        self.start_times = {}
        self.durations = {}
    
    def start_timer(self, name: str):
        """Start timing an operation."""
        self.start_times[name] = perf_counter()
    
    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (perf_counter() - self.start_times.pop(name)) * 1000
        self.durations[name] = duration
        return duration
    
    def get_summary(self) -> Dict[str, float]:
        """Get summary of all timings."""
        return self.durations.copy()


class AccuracyMetrics:
    """Score detections against known circles."""
    
    @staticmethod
    def calculate_precision_recall(true_positives: int, false_positives: int, 
                                   false_negatives: int) -> Dict[str, float]:
        """Calculate precision, recall, and F1 score."""
        precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) > 0 else 0
        recall = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) > 0 else 0
        f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0
        
        return {
            'precision': precision,
            'recall': recall,
            'f1_score': f1
        }
    
    @staticmethod
    def match_circles(hits: Iterable[CircleHit], ground_truth: List[Tuple[int, int, int]],
                      center_tolerance: float = 2.0,
                      radius_tolerance: float = 2.0) -> Dict[str, float]:
        """
        Greedily match hits (strongest first) to ground truth circles.
        
        Each ground truth circle is matched at most once. Unmatched hits count
        as false positives, unmatched ground truth as false negatives.
        """
        unmatched = list(ground_truth)
        true_positives = 0
        false_positives = 0
        
        for hit in sorted(hits, key=lambda h: h.votes, reverse=True):
            match = None
            for circle in unmatched:
                cx, cy, cr = circle
                if (np.hypot(hit.x - cx, hit.y - cy) <= center_tolerance
                        and abs(hit.r - cr) <= radius_tolerance):
                    match = circle
                    break
            if match is None:
                false_positives += 1
            else:
                unmatched.remove(match)
                true_positives += 1
        
        scores = AccuracyMetrics.calculate_precision_recall(
            true_positives, false_positives, len(unmatched)
        )
        scores.update({
            'true_positives': true_positives,
            'false_positives': false_positives,
            'false_negatives': len(unmatched)
        })
        return scores
    
    @staticmethod
    def calculate_center_error(predicted: np.ndarray, 
                               ground_truth: np.ndarray) -> Dict[str, float]:
        """Calculate center distance statistics for paired circles."""
        errors = np.linalg.norm(np.asarray(predicted, dtype=float) -
                                np.asarray(ground_truth, dtype=float), axis=1)
        return {
            'mean_error': float(np.mean(errors)),
            'median_error': float(np.median(errors)),
            'max_error': float(np.max(errors)),
            'std_error': float(np.std(errors))
        }
