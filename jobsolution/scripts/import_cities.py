"""Import cities from a semicolon separated CSV file.

The header row names the columns; English and Russian names are accepted::

    name;region;country
    Москва;Москва;Россия

Rows without a name or country are skipped, an empty region defaults to the
city name, and cities that already exist are left untouched.
"""
import argparse
import csv
import logging
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, List
from sqlalchemy.orm import Session
from jobsolution.config.config import settings
from jobsolution.config.database import SessionLocal, transaction
from jobsolution.db.city_db import find_city, create_city
from jobsolution.models import all_models  # noqa: F401

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {
    "name": ("name", "город"),
    "region": ("region", "регион", "область"),
    "country": ("country", "страна"),
}


class ImportFormatError(ValueError):
    pass


@dataclass
class ImportResult:
    read: int = 0
    inserted: int = 0
    duplicates: int = 0
    skipped: int = 0


def resolve_columns(header: List[str]) -> Dict[str, int]:
    normalized = [h.strip().lower() for h in header]
    columns = {}
    for field, aliases in COLUMN_ALIASES.items():
        for index, name in enumerate(normalized):
            if name in aliases:
                columns[field] = index
                break
        else:
            raise ImportFormatError(f"Missing column '{field}' (accepted: {', '.join(aliases)})")
    return columns


def read_rows(lines: Iterable[str]):
    reader = csv.reader(lines, delimiter=";", quotechar='"', skipinitialspace=True, strict=False)
    try:
        header = next(reader)
    except StopIteration:
        raise ImportFormatError("CSV file is empty")
    columns = resolve_columns(header)

    for line_number, row in enumerate(reader, start=2):
        if not any(cell.strip() for cell in row):
            continue
        values = {
            field: row[index].strip() if index < len(row) else ""
            for field, index in columns.items()
        }
        yield line_number, values


def import_cities(db: Session, lines: Iterable[str]) -> ImportResult:
    result = ImportResult()
    with transaction(db):
        for line_number, values in read_rows(lines):
            result.read += 1
            name, country = values["name"], values["country"]
            if not name or not country:
                logger.warning(f"Line {line_number}: missing name or country, skipped")
                result.skipped += 1
                continue
            region = values["region"] or name
            if find_city(db, name, region, country):
                result.duplicates += 1
                continue
            create_city(db, name, region, country)
            result.inserted += 1
    return result


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import cities from a CSV file")
    parser.add_argument("csv_path", help="path to a ';' separated file with name, region and country columns")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        with open(args.csv_path, encoding="utf-8-sig", newline="") as f:
            result = import_cities(db, f)
    except (OSError, ImportFormatError) as e:
        logger.error(f"Import failed: {e}")
        return 1
    finally:
        db.close()

    logger.info(
        f"Read {result.read} rows: {result.inserted} inserted, "
        f"{result.duplicates} already present, {result.skipped} skipped"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
