"""genoserve — genomic data file server for igv.js."""

__version__ = "1.0.0"
