"""
Reader for Darwin Core occurrence downloads.
"""

import shutil
import zipfile
from pathlib import Path

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F

from occurrence_cleaning.core.schema import (
    LATITUDE,
    LONGITUDE,
    RECORD_ORDER,
    cast_occurrence_columns,
)
from occurrence_cleaning.observability.logger import get_logger

logger = get_logger(__name__)

OCCURRENCE_FILE = "occurrence.txt"


def extract_occurrence_file(archive_path: str | Path) -> Path:
    """
    Extract occurrence.txt from a Darwin Core Archive.

    The file is written to a directory named after the archive, next to it
    (Data/GBIF/download.zip -> Data/GBIF/download/occurrence.txt).

    Args:
        archive_path: Path to the .zip archive

    Returns:
        Path of the extracted occurrence file

    Raises:
        FileNotFoundError: If the archive has no occurrence.txt
    """
    archive_path = Path(archive_path)
    target_dir = archive_path.with_suffix("")
    target = target_dir / OCCURRENCE_FILE

    with zipfile.ZipFile(archive_path) as archive:
        members = [name for name in archive.namelist() if Path(name).name == OCCURRENCE_FILE]
        if not members:
            raise FileNotFoundError(f"{OCCURRENCE_FILE} not found in archive {archive_path}")

        # Prefer the core file at the archive root over nested copies
        member = min(members, key=lambda name: name.count("/"))
        target_dir.mkdir(parents=True, exist_ok=True)
        with archive.open(member) as source, open(target, "wb") as destination:
            shutil.copyfileobj(source, destination)

    logger.info(
        f"Extracted {OCCURRENCE_FILE} from archive",
        extra={"archive": str(archive_path), "target": str(target)},
    )
    return target


class OccurrenceReader:
    """
    Reads occurrence records into a typed Spark DataFrame.

    Accepts a DwC-A zip or a delimited text file. All columns are read as
    strings and then cast to their canonical types; every record is stamped
    with its position in the file.
    """

    def __init__(self, spark: SparkSession):
        """
        Initialize occurrence reader.

        Args:
            spark: Active Spark session
        """
        self.spark = spark

    def read(
        self,
        file_path: str | Path,
        delimiter: str = "\t",
        quote: str = "",
        header: bool = True,
    ) -> DataFrame:
        """
        Read occurrence file into Spark DataFrame.

        Args:
            file_path: Path to a .zip archive or a delimited file
            delimiter: Field delimiter
            quote: Quote character; empty disables quoting, which GBIF
                   tab-delimited downloads need because they contain bare
                   quotes in free text
            header: Whether the file has a header row

        Returns:
            Spark DataFrame of typed occurrence records

        Raises:
            FileNotFoundError: If the file (or occurrence.txt in the archive)
                               does not exist
            ValueError: If the coordinate columns are missing
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Occurrence file not found: {file_path}")

        if path.suffix.lower() == ".zip":
            path = extract_occurrence_file(path)

        raw = (
            self.spark.read
            .option("header", str(header).lower())
            .option("sep", delimiter)
            .option("quote", quote)
            .option("inferSchema", "false")
            .option("mode", "PERMISSIVE")
            .csv(str(path))
        )

        missing = [name for name in (LATITUDE, LONGITUDE) if name not in raw.columns]
        if missing:
            raise ValueError(f"Occurrence file {path} is missing coordinate columns: {missing}")

        df = cast_occurrence_columns(raw).withColumn(RECORD_ORDER, F.monotonically_increasing_id())

        logger.info(
            "Read occurrence file",
            extra={"path": str(path), "columns": len(raw.columns)},
        )
        return df
