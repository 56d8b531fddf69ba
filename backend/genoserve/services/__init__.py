"""Data-root services — extension filter, directory walker, range server."""
