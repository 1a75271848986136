"""Benchmark recognizer latency over a directory of crops."""
from __future__ import annotations

import argparse

from crop_ocr.api import create_recognizer
from crop_ocr.utils.io import iter_image_paths, load_image


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark crop recognition latency")
    parser.add_argument("directory", help="Directory of crop images")
    parser.add_argument("--config", default="configs/default.yaml", help="Path to YAML configuration")
    parser.add_argument("--rounds", type=int, default=5, help="Number of passes over the directory")
    parser.add_argument("--warmup", type=int, default=3, help="Warmup iterations before timing")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    recognizer = create_recognizer(args.config)
    crops = [load_image(path) for path in iter_image_paths(args.directory)]
    if not crops:
        print(f"No crops found in {args.directory}")
        return
    recognizer.warmup(iterations=args.warmup)

    for round_idx in range(args.rounds):
        for crop in crops:
            recognizer.recognize(crop, is_preprocessed=False)
        if recognizer.invoke_count:
            avg = recognizer.average_inference_time()
            print(f"Round {round_idx + 1}: {recognizer.invoke_count} inferences | avg latency {avg * 1000:.2f} ms")

    if recognizer.invoke_count:
        avg = recognizer.average_inference_time()
        print(f"Final average latency: {avg * 1000:.2f} ms | throughput: {1.0 / avg:.2f} crops/s")
    else:
        print("Every crop was blank; no inference was run.")


if __name__ == "__main__":
    main()
