# gender_oracle/eval/run_gemini.py

import os
import sys
import csv
import argparse

from PIL import Image
from tqdm import tqdm

# Make repo root importable
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, "..", ".."))
sys.path.append(PROJECT_ROOT)

from gender_oracle.apis.errors import GenderOracleError
from gender_oracle.apis.gemini_client import GeminiClient
from gender_oracle.data_processing.data_url import image_to_data_url

FIELDNAMES = ["item", "true_gender", "api_pred", "confidence", "reasoning", "error"]


def load_split(data_root: str, split: str):
    """
    Yield (row_dict, base_dir) for the given split under data_root.

    Expects:
        <data_root>/<split>/labels.csv
        <data_root>/<split>/<image files...>   (image mode only)
    """
    base_dir = os.path.join(data_root, split)
    csv_path = os.path.join(base_dir, "labels.csv")

    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"labels.csv not found at {csv_path}")

    with open(csv_path, "r", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)

    for row in rows:
        yield row, base_dir


def evaluate_row(client, mode: str, row: dict, base_dir: str) -> dict:
    """Run one labelled row through the client; errors are recorded, not raised."""
    if mode == "name":
        item = row["name"]
    else:
        item = row["filename"]

    out = {
        "item": item,
        "true_gender": row.get("gender", ""),
        "api_pred": "error",
        "confidence": "",
        "reasoning": "",
        "error": "",
    }

    try:
        if mode == "name":
            result = client.infer_from_text(item)
        else:
            img = Image.open(os.path.join(base_dir, item)).convert("RGB")
            result = client.infer_from_image(image_to_data_url(img))
    except (GenderOracleError, OSError, ValueError) as e:
        out["error"] = str(e)
        return out

    out["api_pred"] = result.category.value
    out["confidence"] = result.confidence
    out["reasoning"] = result.reasoning
    return out


def run(client, mode: str, data_root: str, split: str, out_csv: str, max_items: int = None) -> list:
    results = []
    for row, base_dir in tqdm(load_split(data_root, split), desc=f"{client.name}:{mode}"):
        if max_items is not None and len(results) >= max_items:
            break
        results.append(evaluate_row(client, mode, row, base_dir))

    out_dir = os.path.dirname(out_csv)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_csv, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for r in results:
            writer.writerow(r)

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate the Gemini gender oracle on a labelled split.")
    parser.add_argument("--mode", default="name", choices=["name", "image"],
                        help="Send names (labels.csv 'name' column) or images ('filename' column).")
    parser.add_argument("--data_root", default=None,
                        help="Root directory containing <split>/labels.csv. Default: data/<mode>s")
    parser.add_argument("--split", default="validation",
                        help="Which split to evaluate.")
    parser.add_argument("--out_csv", default=None,
                        help="Output CSV path (default: metadata/results/gemini_<mode>_<split>.csv).")
    parser.add_argument("--max_items", type=int, default=None,
                        help="Optional maximum number of rows to process (for smoke tests).")
    args = parser.parse_args()

    if args.data_root is None:
        args.data_root = os.path.join(PROJECT_ROOT, "data", f"{args.mode}s")

    client = GeminiClient()

    if args.out_csv is None:
        out_dir = os.path.join(PROJECT_ROOT, "metadata", "results")
        args.out_csv = os.path.join(out_dir, f"{client.name}_{args.mode}_{args.split}.csv")

    print("API         :", client.name)
    print("Mode        :", args.mode)
    print("Model       :", client.text_model if args.mode == "name" else client.image_model)
    print("Data root   :", args.data_root)
    print("Split       :", args.split)
    print("Max items   :", args.max_items)
    print("Output CSV  :", args.out_csv)

    results = run(client, args.mode, args.data_root, args.split, args.out_csv, args.max_items)
    n_err = sum(1 for r in results if r["api_pred"] == "error")
    print("Done. Wrote", len(results), "rows.", f"({n_err} errors)")


if __name__ == "__main__":
    main()
