"""Application layer: use cases over domain records."""
