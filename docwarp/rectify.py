#!/usr/bin/env python3
"""Flatten documents from quads supplied by an external detector.

    docwarp-rectify photo.jpg --quad 12,30 380,22 390,370 8,381
    docwarp-rectify scans/ --quads quads.json --size 550x425
"""

import argparse
import json
import sys
from pathlib import Path

import cv2

from . import config
from .crop import crop_centered
from .errors import DocwarpError
from .geometry import Quadrilateral, Size
from .perspective import project_quad_to_rect
from .encode import save_image

EXTS = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"}


def parse_size(text):
    w, sep, h = text.lower().partition("x")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected WxH, got {text!r}")
    try:
        return Size(float(w), float(h))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {text!r}") from None


def parse_point(text):
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected x,y, got {text!r}") from None
    return x, y


def load_quads(path: Path):
    """Read ``{"name.jpg": [[x, y], ...x4]}`` written by the detector."""
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected an object mapping image names to corners")
    quads = {}
    for name, pts in raw.items():
        try:
            quads[name] = Quadrilateral.from_points(pts)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{path}: bad corners for {name!r}: {exc}") from None
    return quads


def read_quads(path: Path):
    try:
        return load_quads(path)
    except (OSError, ValueError) as exc:
        print(f"Could not read quads: {exc}")
        return None


def rectify_image(img, quad, reference, size=None):
    """Flatten ``img`` under ``quad``; optionally center-crop to ``size``."""
    result = project_quad_to_rect(img, quad, reference)
    if result.ok and size is not None:
        result = crop_centered(result.image, size)
    return result


def process_file(p: Path, quad, out_dir: Path, reference, size=None):
    img = cv2.imread(str(p))
    if img is None:
        print(f"Skipping unreadable file: {p.name}")
        return False

    result = rectify_image(img, quad, reference, size)
    if not result.ok:
        print(f"[WARN] Could not flatten {p.name}: {result.error}")
        return False

    out_path = out_dir / f"{p.stem}_flat{config.DEFAULT_EXT}"
    try:
        save_image(result.image, out_path)
    except DocwarpError as exc:
        print(f"[ERROR] {exc}")
        return False
    print(f"Wrote {out_path.name}")
    return True


def process_folder(in_dir: Path, quads, out_dir: Path, reference, size=None):
    files = sorted(p for p in in_dir.iterdir() if p.suffix.lower() in EXTS)
    if not files:
        print(f"No images found in {in_dir}")
        return 0

    done = 0
    for p in files:
        quad = quads.get(p.name)
        if quad is None:
            print(f"[WARN] No quad recorded for: {p.name}")
            continue
        done += process_file(p, quad, out_dir, reference, size)
    return done


def build_parser():
    parser = argparse.ArgumentParser(prog="docwarp-rectify", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("input", type=Path, help="image file or folder of images")
    parser.add_argument("--quad", type=parse_point, nargs=4, metavar="X,Y",
                        help="corners TL TR BR BL for a single image")
    parser.add_argument("--quads", type=Path, help="JSON file mapping image names to corners")
    parser.add_argument("--reference", type=parse_size, default=config.DETECTION_REFERENCE_SIZE,
                        help="coordinate space of the corners (default: %(default)s)")
    parser.add_argument("--size", type=parse_size, help="center-crop the result to WxH")
    parser.add_argument("--out", type=Path, default=Path.cwd() / "outputs", help="output folder")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if not args.input.exists():
        print(f"Input not found: {args.input}")
        return 1

    if args.input.is_dir():
        if args.quad is not None:
            print("--quad applies to a single image; give a folder --quads <file.json>")
            return 1
        if args.quads is None:
            print("A folder needs --quads <file.json>")
            return 1
        quads = read_quads(args.quads)
        if quads is None:
            return 1
        process_folder(args.input, quads, args.out, args.reference, args.size)
        return 0

    quad = None
    if args.quad is not None:
        quad = Quadrilateral.from_points(args.quad)
    elif args.quads is not None:
        quads = read_quads(args.quads)
        if quads is None:
            return 1
        quad = quads.get(args.input.name)
    if quad is None:
        print(f"No quad given for {args.input.name}; use --quad or --quads")
        return 1
    return 0 if process_file(args.input, quad, args.out, args.reference, args.size) else 1


if __name__ == "__main__":
    sys.exit(main())
