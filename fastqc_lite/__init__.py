"""Reads, overlap merging, polyX trimming, UMI tagging, statistics, options and output for FASTQ data."""

__version__ = "1.0.0"