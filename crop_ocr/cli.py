"""Command line interface for the crop recognizer."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from crop_ocr.config import load_config
from crop_ocr.errors import CropOcrError
from crop_ocr.ocr.images import FloatGrayImage
from crop_ocr.ocr.recognizer import TextRecognizer
from crop_ocr.utils.io import iter_image_paths, load_gray_image, load_image, save_buffer

LOGGER = logging.getLogger(__name__)


def _recognize_paths(recognizer: TextRecognizer, paths: Iterable[Path], args: argparse.Namespace) -> int:
    failures = 0
    for path in paths:
        try:
            image = load_gray_image(path) if args.gray else load_image(path)
            if args.dump_dir:
                buffer, non_mono = recognizer.prepare(image, args.preprocessed)
                save_buffer(Path(args.dump_dir) / f"{path.stem}.png", buffer)
                text = recognizer.recognize(FloatGrayImage(buffer), is_preprocessed=True) if non_mono else ""
            else:
                text = recognizer.recognize(image, is_preprocessed=args.preprocessed)
        except (CropOcrError, OSError) as exc:
            LOGGER.error("Failed to recognize %s: %s", path, exc)
            failures += 1
            continue
        print(f"[{path}] {text}" if text else f"[{path}] <empty>")

    if recognizer.invoke_count:
        avg_ms = recognizer.average_inference_time() * 1000.0
        print(f"Average inference time: {avg_ms:.2f} ms over {recognizer.invoke_count} call(s)")
    return 1 if failures else 0


def _load_recognizer(args: argparse.Namespace) -> TextRecognizer:
    config = load_config(args.config)
    logging.getLogger("crop_ocr").setLevel(config.log_level.upper())
    return TextRecognizer.from_config(config)


def _run_image(args: argparse.Namespace) -> int:
    recognizer = _load_recognizer(args)
    return _recognize_paths(recognizer, args.sources, args)


def _run_dir(args: argparse.Namespace) -> int:
    recognizer = _load_recognizer(args)
    paths = list(iter_image_paths(args.directory, args.pattern))
    if not paths:
        print(f"No images found in {args.directory}")
        return 0
    return _recognize_paths(recognizer, paths, args)


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--gray", action="store_true", help="Load crops as single channel images.")
    parser.add_argument(
        "--preprocessed",
        action="store_true",
        help="Crops are already canonical model input (requires --gray).",
    )
    parser.add_argument("--dump-dir", type=Path, help="Write the model input buffer of every crop here.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recognize short text in image crops.")
    parser.add_argument("--config", type=Path, default=Path("configs/default.yaml"), help="Path to the YAML config.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    image_parser = subparsers.add_parser("image", help="Run recognition on one or more crop files.")
    image_parser.add_argument("sources", type=Path, nargs="+", help="Paths to the input crops.")
    _add_common_options(image_parser)
    image_parser.set_defaults(func=_run_image)

    dir_parser = subparsers.add_parser("dir", help="Run recognition on every crop in a directory.")
    dir_parser.add_argument("directory", type=Path, help="Directory containing crops.")
    dir_parser.add_argument("--pattern", default="*", help="Glob pattern for crop files (default: *).")
    _add_common_options(dir_parser)
    dir_parser.set_defaults(func=_run_dir)

    return parser


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.preprocessed and not args.gray:
        parser.error("--preprocessed requires --gray; color crops are always preprocessed")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
