"""Bulk file conversion — grid references to lat/lon, or lat/lon to grid references.

Usage:
    python scripts/convert_file.py to-latlon refs.csv out.csv                # 'gridref' column -> WGS84
    python scripts/convert_file.py to-latlon refs.csv out.parquet --datum OSGB36
    python scripts/convert_file.py to-grid points.parquet out.csv --digits 6
    python scripts/convert_file.py to-grid points.csv out.csv --lat lat --lon lng

Input and output formats follow the file extension (.csv or .parquet).
Rows that cannot be converted are kept, with the reason in an 'error' column.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pandas as pd

from osgrid.bulk import gridrefs_to_latlon, latlon_to_gridrefs
from osgrid.config import DEFAULT_GRIDREF_DIGITS
from osgrid.geodesy.datums import DATUMS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("convert_file")


# ── File I/O ──────────────────────────────────────────────────────


def read_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        return pd.read_csv(path)
    raise ValueError(f"Unsupported input format: {path.suffix} (use .csv or .parquet)")


def write_table(df: pd.DataFrame, path: Path):
    if path.suffix == ".parquet":
        df.to_parquet(path, index=False, compression="snappy")
    elif path.suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        raise ValueError(f"Unsupported output format: {path.suffix} (use .csv or .parquet)")


# ── Main ──────────────────────────────────────────────────────────


def run(args) -> int:
    src = Path(args.input)
    dst = Path(args.output)
    start = time.time()

    df = read_table(src)
    log.info("Read %d rows from %s", len(df), src)

    if args.mode == "to-latlon":
        out = gridrefs_to_latlon(df, column=args.column, datum=args.datum)
    else:
        out = latlon_to_gridrefs(
            df, lat_column=args.lat, lon_column=args.lon,
            datum=args.datum, digits=args.digits,
        )

    write_table(out, dst)
    failed = int(out["error"].notna().sum())
    log.info("Wrote %d rows to %s in %.1fs", len(out), dst, time.time() - start)
    if failed:
        log.warning("%d rows failed to convert (see 'error' column)", failed)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert grid references and lat/lon in CSV/Parquet files")
    parser.add_argument("mode", choices=["to-latlon", "to-grid"], help="Conversion direction")
    parser.add_argument("input", help="Input .csv or .parquet file")
    parser.add_argument("output", help="Output .csv or .parquet file")
    parser.add_argument(
        "--datum", default="WGS84", choices=DATUMS.names(),
        help="Datum of the lat/lon columns (default: WGS84)",
    )
    parser.add_argument(
        "--column", default="gridref",
        help="Grid reference column for to-latlon (default: gridref)",
    )
    parser.add_argument("--lat", default="latitude", help="Latitude column for to-grid")
    parser.add_argument("--lon", default="longitude", help="Longitude column for to-grid")
    parser.add_argument(
        "--digits", type=int, default=DEFAULT_GRIDREF_DIGITS, choices=[0, 2, 4, 6, 8, 10],
        help=f"Grid reference precision for to-grid; 0 for numeric (default: {DEFAULT_GRIDREF_DIGITS})",
    )
    return parser


if __name__ == "__main__":
    sys.exit(run(build_parser().parse_args()))
