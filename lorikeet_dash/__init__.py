"""A web dashboard charting the results of a lorikeet style test plan."""

VERSION = "0.1.0"
