"""Shared helpers for :mod:`mae_forex`."""
