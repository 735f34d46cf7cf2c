"""Reserved placeholder values standing in for "no usable data"."""

from enum import Enum


class Sentinel(str, Enum):
    NOT_AVAILABLE = "N/A"
    UNKNOWN_COMPETITOR = "Unknown Competitor"
    NO_DATA = "No data available due to server error"
    NO_SUMMARY = "No competitor data available due to server error."
