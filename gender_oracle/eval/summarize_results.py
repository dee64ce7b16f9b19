import os
import sys
import argparse
from typing import Dict

import pandas as pd

# --------------------
# Path setup
# --------------------
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, "..", ".."))
sys.path.append(PROJECT_ROOT)

REQUIRED_COLUMNS = ["item", "true_gender", "api_pred", "confidence"]


def load_results(results_csv: str) -> pd.DataFrame:
    """
    Load a run_gemini.py results CSV and add:
      - true_norm / pred_norm : lower-cased, trimmed labels
      - correct               : prediction matches the label (error rows excluded)
    """
    print(f"Loading results: {results_csv}")
    df = pd.read_csv(results_csv, keep_default_na=False)

    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            raise ValueError(f"results CSV missing column: {col}")

    df["true_norm"] = df["true_gender"].astype(str).str.strip().str.lower()
    df["pred_norm"] = df["api_pred"].astype(str).str.strip().str.lower()
    df["confidence"] = pd.to_numeric(df["confidence"], errors="coerce")
    df["correct"] = df["true_norm"] == df["pred_norm"]
    return df


def summarize(df: pd.DataFrame) -> Dict[str, object]:
    """
    Accuracy is computed over rows that have both a label and a non-error
    prediction.
    """
    scored = df[(df["true_norm"] != "") & (df["pred_norm"] != "error")]

    summary = {
        "n_rows": int(len(df)),
        "n_errors": int((df["pred_norm"] == "error").sum()),
        "n_scored": int(len(scored)),
        "accuracy": float(scored["correct"].mean()) if len(scored) else float("nan"),
        "accuracy_by_gender": scored.groupby("true_norm")["correct"].mean().to_dict(),
        "pred_distribution": df["pred_norm"].value_counts().to_dict(),
        "mean_confidence_by_pred": (
            df[df["pred_norm"] != "error"].groupby("pred_norm")["confidence"].mean().to_dict()
        ),
    }
    return summary


def print_summary(summary: Dict[str, object]):
    print("\n=== Summary ===")
    print(f"Rows          : {summary['n_rows']}")
    print(f"Errors        : {summary['n_errors']}")
    print(f"Scored rows   : {summary['n_scored']}")
    print(f"Accuracy      : {summary['accuracy']:.3f}")

    print("\nAccuracy by true gender:")
    for gender, acc in sorted(summary["accuracy_by_gender"].items()):
        print(f"  {gender:<12} {acc:.3f}")

    print("\nPrediction distribution:")
    for pred, count in sorted(summary["pred_distribution"].items()):
        print(f"  {pred:<12} {count}")

    print("\nMean confidence by prediction:")
    for pred, conf in sorted(summary["mean_confidence_by_pred"].items()):
        print(f"  {pred:<12} {conf:.3f}")


def main():
    parser = argparse.ArgumentParser(description="Summarize a Gemini evaluation results CSV.")
    parser.add_argument("--results_csv", required=True,
                        help="CSV written by gender_oracle/eval/run_gemini.py.")
    args = parser.parse_args()

    df = load_results(args.results_csv)
    print_summary(summarize(df))


if __name__ == "__main__":
    main()
