"""Fetching and normalising MAE forex market data."""
