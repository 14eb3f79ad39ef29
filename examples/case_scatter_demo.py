from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from caseplot import ChartConfig, scatter_chart
from caseplot.adapters import coerce_cases

STAGES = ("Stage I", "Stage IA", "Stage IB", "Stage II", "Stage IIA", "Stage IIB", "Stage IIIA", "Stage IV")
DISEASES = ("LUAD", "LUSC")


def _synthetic_rows(count: int, seed: int) -> list[dict[str, object]]:
    rng = np.random.default_rng(seed)
    rows: list[dict[str, object]] = []
    for idx in range(count):
        days = float(rng.gamma(2.0, 400.0)) if rng.random() > 0.08 else None
        rows.append(
            {
                "case_id": f"TCGA-{idx:04d}",
                "case_gender": "MALE" if rng.random() < 0.55 else "FEMALE",
                "case_disease_type": DISEASES[int(rng.integers(len(DISEASES)))],
                "case_pathologic_stage": STAGES[int(rng.integers(len(STAGES)))],
                "case_age_at_diagnosis": float(np.clip(rng.normal(65.0, 9.0), 35.0, 90.0)),
                "case_days_to_death": days,
            }
        )
    return rows


def _load_rows(path: Path) -> object:
    import pandas as pd

    sep = "\t" if path.suffix in {".tsv", ".txt"} else ","
    return pd.read_csv(path, sep=sep)


def _save_rgba(path: Path, frame: np.ndarray) -> None:
    Image.fromarray(frame, mode="RGBA").save(path)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render the clinical case scatter plot to PNG files.")
    parser.add_argument("--data", type=Path, default=None, help="CSV/TSV export with case_* columns")
    parser.add_argument("--out-dir", type=Path, default=Path("caseplot_demo_out"))
    parser.add_argument("--width", type=int, default=960)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--cases", type=int, default=180)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    raw = _load_rows(args.data) if args.data is not None else _synthetic_rows(args.cases, args.seed)
    cases = coerce_cases(raw)

    chart = scatter_chart(width=args.width, height=args.height, config=ChartConfig.from_env())
    chart.data(cases)
    summary = chart.render()
    print(f"plotted {summary.plotted}/{summary.total} cases ({summary.excluded} without survival data)")

    args.out_dir.mkdir(parents=True, exist_ok=True)
    full_path = args.out_dir / "cases_full.png"
    _save_rgba(full_path, chart.to_rgba())

    # Drag a brush over the left third of the scope band.
    band_x, band_y, band_w, band_h = chart.geometry.scope_rect
    y = band_y + band_h / 2
    chart.handle_event("pointer_down", {"x": band_x + band_w * 0.05, "y": y})
    chart.handle_event("pointer_move", {"x": band_x + band_w * 0.2, "y": y})
    chart.handle_event("pointer_up", {"x": band_x + band_w * 0.33, "y": y})
    zoomed_path = args.out_dir / "cases_zoomed.png"
    _save_rgba(zoomed_path, chart.to_rgba())

    chart.set_filter({"case_gender": "FEMALE", "case_disease_type": "LUAD"})
    filtered_path = args.out_dir / "cases_female_luad.png"
    _save_rgba(filtered_path, chart.to_rgba())

    print("filter options:", chart.filter_options())
    for path in (full_path, zoomed_path, filtered_path):
        print(f"wrote {path}")


if __name__ == "__main__":
    main()
