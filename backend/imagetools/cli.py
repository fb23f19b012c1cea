"""
ImageTools command line.

Usage:
  imagetools signature photo.jpg                     # prints the 648-element signature
  imagetools compare a.jpg b.jpg                     # prints the symmetric distance
  imagetools process in.jpg out.png --step gradient_magnitude --step single_threshold:threshold=mean
  imagetools operators                               # lists registered operators
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from imagetools.engine.pipeline import PipelineConfig, Step, create_pipeline
from imagetools.engine.registry import get_registry
from imagetools.engine.signatures import signature_difference, signature_vector
from imagetools.errors import ImageToolsError
from imagetools.image_io import load_image, save_image
from imagetools.logging_setup import configure_logging


def parse_value(text: str) -> Any:
    """Best-effort literal: bool, int, float, else the raw string."""
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            pass
    return text


def parse_step(text: str) -> Step:
    """``op`` or ``op:key=value,key=value``."""
    op, _, rest = text.partition(":")
    params: dict[str, Any] = {}
    if rest:
        for pair in rest.split(","):
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise argparse.ArgumentTypeError(f"Bad step parameter {pair!r} in {text!r}")
            params[key.strip()] = parse_value(value.strip())
    return Step(op=op.strip(), params=params)


def _cmd_signature(args: argparse.Namespace) -> int:
    for path in args.images:
        vector = signature_vector(load_image(path))
        print(f"{path}: {' '.join(str(v) for v in vector.tolist())}")
    return 0


def _cmd_compare(args: argparse.Namespace) -> int:
    sig_a = signature_vector(load_image(args.image_a))
    sig_b = signature_vector(load_image(args.image_b))
    print(f"{signature_difference(sig_a, sig_b):.6f}")
    return 0


def _cmd_process(args: argparse.Namespace) -> int:
    pipeline = create_pipeline(
        PipelineConfig(stop_on_error=args.stop_on_error, normalise_output=args.normalise)
    )
    ctx = pipeline.run(load_image(args.input), args.steps or [])
    save_image(args.output, ctx.image)
    for label, message in ctx.errors.items():
        print(f"{label}: {message}", file=sys.stderr)
    print(f"Saved {args.output} ({len(ctx.completed)}/{len(args.steps or [])} steps)")
    return 0 if ctx.succeeded else 1


def _cmd_operators(args: argparse.Namespace) -> int:
    import imagetools.engine.operators  # noqa: F401

    for spec in get_registry().all():
        params = ", ".join(f"{k}={v}" for k, v in spec.params.items())
        print(f"{spec.id:<20} {spec.category.name.lower():<12} {spec.description}" + (f" [{params}]" if params else ""))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="imagetools", description="Float-grid image processing and signatures")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_sig = sub.add_parser("signature", help="Print image signatures")
    p_sig.add_argument("images", nargs="+", help="Image files")
    p_sig.set_defaults(func=_cmd_signature)

    p_cmp = sub.add_parser("compare", help="Signature distance between two images")
    p_cmp.add_argument("image_a")
    p_cmp.add_argument("image_b")
    p_cmp.set_defaults(func=_cmd_compare)

    p_proc = sub.add_parser("process", help="Run an operator pipeline")
    p_proc.add_argument("input", help="Input image")
    p_proc.add_argument("output", help="Output image (format from extension)")
    p_proc.add_argument(
        "-s", "--step", dest="steps", action="append", type=parse_step,
        help="op or op:key=value,... (repeatable, applied in order)",
    )
    p_proc.add_argument("--stop-on-error", action="store_true", help="Skip remaining steps after a failure")
    p_proc.add_argument("-n", "--normalise", action="store_true", help="Normalise the final image")
    p_proc.set_defaults(func=_cmd_process)

    p_ops = sub.add_parser("operators", help="List registered operators")
    p_ops.set_defaults(func=_cmd_operators)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.func(args)
    except ImageToolsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
