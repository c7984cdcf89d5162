"""
Spark join application driven by Flight discovery.

Reads two data assets through the Flight data source, joins them on a
column, and writes the result to a path relative to a connection.
"""

import logging

from pyspark.sql import DataFrame, SparkSession

from config.config import FlightConfig
from core.logging.context import set_log_context
from flight.discovery import Discovery, DiscoveryResult
from flight.entities import AssetRef
from flight.options import OptionsBuilder

logger = logging.getLogger(__name__)

# Spark format selecting Arrow Flight as the data source
FLIGHT_FORMAT = "com.ibm.connect.spark.flight"

# Rows per round trip; small batches read from the source too often
BATCH_SIZE = 10_000

# Endpoints the Flight service may hand out for parallel reads. Ignored by
# data sources that only offer a single endpoint.
NUM_PARTITIONS = 2

TIMEOUT = "60s"

WRITE_MODE = "overwrite"


class FlightJoinApp:
    """Joins two Flight data assets and writes the result through a connection."""

    def __init__(
        self,
        spark: SparkSession,
        discovery: Discovery,
        config: FlightConfig,
        access_token: str,
    ):
        self.spark = spark
        self.discovery = discovery
        self.config = config
        self.access_token = access_token

    def run(self) -> None:
        names = self.read_data(self.config.name_asset)
        numerals = self.read_data(self.config.numeral_asset)

        logger.info("Joining datasets", extra={"join_column": self.config.join_column_name})
        results = names.join(numerals, self.config.join_column_name)

        self.write_data(results, self.config.result_path)

    def read_data(self, asset: AssetRef) -> DataFrame:
        """Read a dataset from a data asset using the Flight service."""
        set_log_context(stage="read", asset_id=asset.id)
        result = self.discovery.discover_asset(asset)
        logger.info(f"Asset discovery = {result.to_pretty_json()}")

        options = self.default_options(result).num_partitions(NUM_PARTITIONS).build()
        logger.debug(
            "Reading Flight asset",
            extra={"format": FLIGHT_FORMAT, "num_partitions": NUM_PARTITIONS},
        )
        return self.spark.read.format(FLIGHT_FORMAT).options(**options).load()

    def write_data(self, dataset: DataFrame, path: str) -> None:
        """Write a dataset to a path relative to the configured connection."""
        set_log_context(stage="write", asset_id="", connection_id=self.config.connection_id)
        result = self.discovery.discover_path(self.config.connection, path)
        logger.info(f"Connection/path discovery = {result.to_pretty_json()}")

        options = self.default_options(result).build()
        logger.info(
            "Writing Flight dataset",
            extra={"format": FLIGHT_FORMAT, "mode": WRITE_MODE, "path": path},
        )
        dataset.write.format(FLIGHT_FORMAT).options(**options).mode(WRITE_MODE).save()

    def default_options(self, result: DiscoveryResult) -> OptionsBuilder:
        """Options shared by reads and writes."""
        return (
            self.discovery.options(result)
            .access_token(self.access_token)
            .batch_size(BATCH_SIZE)
            .timeout(TIMEOUT)
        )


__all__ = ["BATCH_SIZE", "FLIGHT_FORMAT", "NUM_PARTITIONS", "TIMEOUT", "FlightJoinApp"]
