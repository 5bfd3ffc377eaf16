"""
Purpose: Build Partner snapshots from tabular data.
What it does:
Accepts a pandas DataFrame (usually read from a CSV export of the partner
service) and turns each row into a Partner. Rows without coordinates keep
location=None so they are excluded from matching instead of dropped.

Expected columns:
partner_id, partner_type, lat, lon, available, status, rating,
total_deliveries, successful_deliveries (name optional)
"""

from __future__ import annotations

from typing import List

import pandas as pd

from .models import Partner

REQUIRED_COLUMNS = ("partner_id", "partner_type", "lat", "lon")


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


def partners_from_frame(frame: pd.DataFrame) -> List[Partner]:
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise ValueError(f"Partner frame is missing columns: {', '.join(missing)}")

    partners = []
    for _, row in frame.iterrows():
        lat = row["lat"]
        lon = row["lon"]
        has_location = not (pd.isna(lat) or pd.isna(lon))

        name = row.get("name", "")
        if pd.isna(name):
            name = ""

        partners.append(
            Partner.new(
                str(row["partner_id"]),
                str(row["partner_type"]).upper(),
                float(lat) if has_location else None,
                float(lon) if has_location else None,
                name=str(name),
                available=_as_bool(row.get("available", True)),
                status=str(row.get("status", "ACTIVE")).upper(),
                rating=float(row.get("rating", 0.0)),
                total_deliveries=int(row.get("total_deliveries", 0)),
                successful_deliveries=int(row.get("successful_deliveries", 0)),
            )
        )
    return partners


def load_partners_csv(path) -> List[Partner]:
    return partners_from_frame(pd.read_csv(path))
