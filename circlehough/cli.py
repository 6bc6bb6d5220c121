"""Command line entry point: detect circles in an image file."""

import argparse
import logging
import sys
from pathlib import Path

from circlehough.config import load_config
from circlehough.core import CircleDetector
from circlehough.errors import CircleHoughError
from circlehough.utils.io_handler import JSONWriter, hits_to_dict, load_image, save_image
from circlehough.utils.logger import setup_logger
from circlehough.utils.visualization import draw_hits


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="circlehough",
        description="Detect circles with a circle Hough transform"
    )
    parser.add_argument("image", help="Input image path")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--min-radius", type=int, help="Smallest radius searched")
    parser.add_argument("--edge-threshold", type=int,
                        help="Grey value below which a preprocessed pixel is an edge")
    parser.add_argument("--angle-step", type=float, help="Angle sampling step in degrees")
    parser.add_argument("--workers", type=int, help="Voting threads")
    parser.add_argument("--top", type=int, help="Keep only the N strongest circles")
    parser.add_argument("--merge-radius", type=int,
                        help="Suppress concentric hits within this radius difference")
    parser.add_argument("--output-image", help="Write annotated image here")
    parser.add_argument("--output-json", help="Write detection results as JSON here")
    parser.add_argument("--diagnostics", help="Write accumulator slices into this directory")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict:
    """Translate command line flags into a config override dictionary."""
    detection = {}
    if args.min_radius is not None:
        detection["min_radius"] = args.min_radius
    if args.edge_threshold is not None:
        detection["edge_grey_threshold"] = args.edge_threshold
    if args.angle_step is not None:
        detection["angle_step_degrees"] = args.angle_step
    if args.workers is not None:
        detection["workers"] = args.workers
    
    peaks = {}
    if args.top is not None:
        peaks["max_hits"] = args.top
    if args.merge_radius is not None:
        peaks["radius_tolerance"] = args.merge_radius
    
    overrides = {"detection": detection, "peaks": peaks}
    if args.diagnostics:
        overrides["diagnostics"] = {"enabled": True, "output_dir": args.diagnostics}
    if args.log_level:
        overrides["logging"] = {"level": args.log_level.upper()}
    return overrides


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    
    if not Path(args.image).exists():
        print(f"Error: Image not found at '{args.image}'", file=sys.stderr)
        return 1
    
    try:
        config = load_config(args.config, overrides_from_args(args))
        level = config["logging"]["level"]
        logger = setup_logger('circlehough', level.upper() if isinstance(level, str) else level,
                              config["logging"]["log_file"])
        
        image = load_image(args.image)
        detector = CircleDetector.from_config(config)
        hits = detector.detect(image)
    except CircleHoughError as e:
        logging.getLogger('circlehough').error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    print(f"Circles detected: {len(hits)}")
    for rank, hit in enumerate(hits, start=1):
        print(f"  {rank:3d}: {hit}")
    
    try:
        if args.output_image:
            save_image(draw_hits(image, hits), args.output_image)
            logger.info(f"Annotated image written to {args.output_image}")
        
        if args.output_json:
            JSONWriter.save_results(hits_to_dict(hits, args.image), args.output_json)
            logger.info(f"Results written to {args.output_json}")
    except OSError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
