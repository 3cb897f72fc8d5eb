import os
import time
import logging
from typing import List

import pandas as pd

from josaa_api.exceptions import LoadError
from josaa_api.models import DatasetStats, SeatRecord
from josaa_api.store import SeatStore
from ingestion.common.interface.strategy_interface import DatasetLoaderStrategy, ValidationResult
from ingestion.csv_ingestion.record_standardizer import SeatRowStandardizer

logger = logging.getLogger(__name__)

# How many rejected rows to quote in the LoadError message
MAX_REPORTED_ERRORS = 10

class CsvSeatLoader(DatasetLoaderStrategy):
    """
    Builds the immutable SeatStore from a header-row CSV.
    Atomic: one rejected row fails the whole load.
    """

    def get_source_slug(self) -> str:
        return "csv"

    def _read_frame(self, path: str) -> pd.DataFrame:
        if not os.path.exists(path):
            directory = os.path.dirname(path) or "."
            available = sorted(os.listdir(directory)) if os.path.isdir(directory) else []
            logger.error(f"CSV file not found at path: {path}")
            logger.error(f"Available files in {directory}: {', '.join(available)}")
            raise LoadError(f"CSV file not found at path: {path}", source=path)

        try:
            # Every cell as text; typing happens in the standardizer
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Error reading CSV: {e}")
            raise LoadError(f"Unable to parse CSV {path}: {e}", source=path) from e

        df.columns = [str(c).strip() for c in df.columns]
        missing = [c for c in SeatRowStandardizer.REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise LoadError(f"CSV {path} is missing required columns: {', '.join(missing)}", source=path)
        return df

    @staticmethod
    def _compute_stats(df: pd.DataFrame) -> DatasetStats:
        states = df[SeatRowStandardizer.COL_STATE] if SeatRowStandardizer.COL_STATE in df.columns else pd.Series(dtype=str)
        return DatasetStats(
            total_records=int(len(df)),
            unique_institutes=int(df[SeatRowStandardizer.COL_INSTITUTE].nunique()),
            unique_programs=int(df[SeatRowStandardizer.COL_PROGRAM].nunique()),
            unique_quotas=int(df[SeatRowStandardizer.COL_QUOTA].nunique()),
            unique_genders=int(df[SeatRowStandardizer.COL_GENDER].nunique()),
            unique_states=int(states[states.str.strip() != ""].nunique()),
        )

    def load(self, source: str) -> SeatStore:
        logger.info(f"Loading seat dataset from {source}")
        start = time.perf_counter()

        df = self._read_frame(source)

        records: List[SeatRecord] = []
        flagged: List[str] = []
        rejected: List[str] = []
        # Header is line 1
        for idx, row in enumerate(df.to_dict(orient="records")):
            result = SeatRowStandardizer.standardize(row, line_number=idx + 2)
            if result.outcome == ValidationResult.REJECT:
                rejected.append(result.reason)
                continue
            if result.outcome == ValidationResult.FLAG:
                flagged.append(result.reason)
            records.append(result.record)

        if rejected:
            shown = "; ".join(rejected[:MAX_REPORTED_ERRORS])
            logger.error(f"Rejected {len(rejected)} rows from {source}")
            raise LoadError(
                f"{len(rejected)} malformed rows in {source}: {shown}",
                source=source,
                row_errors=rejected,
            )

        if flagged:
            logger.warning(f"⚠️ {len(flagged)} rows flagged (kept): {flagged[0]}")

        store = SeatStore(records, stats=self._compute_stats(df), source=source)
        elapsed = time.perf_counter() - start
        logger.info(f"Loaded {store.count()} records from CSV in {elapsed:.3f} seconds")
        logger.info(f"Data stats: {store.stats}")
        return store


def load_seat_store(path: str) -> SeatStore:
    return CsvSeatLoader().load(path)
