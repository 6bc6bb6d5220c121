"""I/O handling for images and JSON output."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Dict, Iterable, List, Union

from circlehough.detection.hits import CircleHit
from circlehough.errors import InvalidImageError


class JSONWriter:
    """Write detection results to JSON."""
    
    @staticmethod
    def save_results(output_dict: Union[Dict, List], output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output_dict, f, indent=indent)
    
    @staticmethod
    def load_results(input_path: str) -> Union[Dict, List]:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def hits_to_dict(hits: Iterable[CircleHit], image_path: str = None) -> Dict:
    """Build the JSON document for a ranked hit list."""
    hits = list(hits)
    return {
        "image": image_path,
        "circles_detected": len(hits),
        "circles": [
            dict(rank=rank, **hit.as_dict())
            for rank, hit in enumerate(hits, start=1)
        ]
    }


def hits_from_dict(document: Dict) -> List[CircleHit]:
    """Rebuild hits from a document written by hits_to_dict."""
    return [
        CircleHit(c["x"], c["y"], c["r"], c["votes"])
        for c in document.get("circles", [])
    ]


def save_image(image: np.ndarray, output_path: str):
    """Save image to file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output_path), image):
        raise IOError(f"Failed to write image to {output_path}")


def load_image(image_path: str) -> np.ndarray:
    """Load image from file as a 3-channel array."""
    image = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if image is None:
        raise InvalidImageError(f"Failed to load image from {image_path}")
    return image
