"""NOAA storm events database repository implementation."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import requests

from ...config.settings import NOAA_COLUMNS
from ...domain.entities.damage_magnitude import DamageMagnitude
from ...domain.entities.storm_event import StormEvent
from ...domain.exceptions import SchemaError
from ...domain.repositories.storm_event_repository import StormEventRepository

logger = logging.getLogger(__name__)

DATE_FORMAT = "%m/%d/%Y %H:%M:%S"
DOWNLOAD_TIMEOUT = 300
CHUNK_SIZE = 1024 * 1024


class NOAAStormEventRepository(StormEventRepository):
    """Repository for storm events stored as a (possibly compressed) CSV file."""

    def __init__(self, data_file: str, columns: Optional[Dict[str, str]] = None):
        """
        Initialize repository.

        Args:
            data_file: Path to CSV file with storm events (.csv, .csv.bz2, ...)
            columns: Mapping of field name to raw column name (default: NOAA names)
        """
        self.data_file = Path(data_file)
        self.columns = dict(NOAA_COLUMNS if columns is None else columns)

    @staticmethod
    def download(url: str, destination: str, force: bool = False) -> Path:
        """
        Download the raw storm database.

        Args:
            url: Source URL
            destination: Local file path
            force: Re-download even if the file already exists

        Returns:
            Path of the local file
        """
        target = Path(destination)
        if target.exists() and not force:
            logger.info(f"Storm data already present at {target}, skipping download")
            return target

        target.parent.mkdir(parents=True, exist_ok=True)
        partial = target.with_name(target.name + ".part")
        logger.info(f"Downloading storm data from {url}")

        with requests.get(url, timeout=DOWNLOAD_TIMEOUT, stream=True) as response:
            response.raise_for_status()
            written = 0
            with open(partial, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
                    written += len(chunk)

        partial.replace(target)
        logger.info(f"Downloaded {written / 1e6:.1f} MB to {target}")
        return target

    def get_events(self) -> List[StormEvent]:
        """Load storm events from the CSV file."""
        if not self.data_file.exists():
            raise FileNotFoundError(f"Storm data file not found: {self.data_file}")

        logger.info(f"Loading storm events from {self.data_file}")
        wanted = set(self.columns.values())
        df = pd.read_csv(
            self.data_file, dtype=str, keep_default_na=False, usecols=lambda c: c in wanted
        )
        frame = self.to_frame(df)

        result = [
            StormEvent(
                event_id=int(event_id),
                event_type=event_type,
                property_damage=float(prop),
                crop_damage=float(crop),
                fatalities=int(fat),
                injuries=int(inj),
                begin_date=begin.date() if pd.notna(begin) else None,
            )
            for event_id, event_type, prop, crop, fat, inj, begin in zip(
                frame["event_id"],
                frame["event_type"],
                frame["property_damage"],
                frame["crop_damage"],
                frame["fatalities"],
                frame["injuries"],
                frame["begin_date"],
            )
        ]

        logger.info(f"Loaded {len(result)} storm events")
        return result

    def to_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate a raw table and convert it to the event schema.

        Damage amounts are multiplied by their decoded magnitude codes.
        Unparseable begin dates become NaT.

        Raises:
            SchemaError: On missing columns, non-numeric or negative values,
                fractional counts, or duplicate identifiers
        """
        optional = {"begin_date"}
        missing = [
            raw
            for name, raw in self.columns.items()
            if name not in optional and raw not in df.columns
        ]
        if missing:
            raise SchemaError(f"Storm data is missing required columns: {missing}")

        col = self.columns
        out = pd.DataFrame(index=df.index)
        out["event_id"] = self._count(df, col["event_id"])
        if out["event_id"].duplicated().any():
            n_dup = int(out["event_id"].duplicated().sum())
            raise SchemaError(f"Column {col['event_id']} has {n_dup} duplicate identifiers")

        out["event_type"] = df[col["event_type"]].fillna("").astype(str)

        prop_mult = df[col["property_damage_exp"]].map(DamageMagnitude.multiplier_for)
        crop_mult = df[col["crop_damage_exp"]].map(DamageMagnitude.multiplier_for)
        out["property_damage"] = self._numeric(df, col["property_damage"]) * prop_mult
        out["crop_damage"] = self._numeric(df, col["crop_damage"]) * crop_mult
        out["fatalities"] = self._count(df, col["fatalities"])
        out["injuries"] = self._count(df, col["injuries"])

        date_col = col.get("begin_date")
        if date_col and date_col in df.columns:
            out["begin_date"] = pd.to_datetime(df[date_col], format=DATE_FORMAT, errors="coerce")
            n_bad = int(out["begin_date"].isna().sum())
            if n_bad:
                logger.warning(f"{n_bad} rows have an unparseable {date_col}, left as missing")
        else:
            out["begin_date"] = pd.NaT

        return out

    @staticmethod
    def _numeric(df: pd.DataFrame, column: str) -> pd.Series:
        """Parse a column as non-negative numbers or fail."""
        values = pd.to_numeric(df[column], errors="coerce")
        n_invalid = int(values.isna().sum())
        if n_invalid:
            raise SchemaError(f"Column {column} has {n_invalid} missing or non-numeric values")
        if (values < 0).any():
            raise SchemaError(f"Column {column} has negative values")
        return values

    @classmethod
    def _count(cls, df: pd.DataFrame, column: str) -> pd.Series:
        """Parse a column as non-negative whole numbers ('15.00' is fine) or fail."""
        values = cls._numeric(df, column)
        n_fractional = int((values % 1 != 0).sum())
        if n_fractional:
            raise SchemaError(f"Column {column} has {n_fractional} non-integer values")
        return values
