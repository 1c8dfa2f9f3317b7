"""Adapters connecting the batch to a Koha installation."""
