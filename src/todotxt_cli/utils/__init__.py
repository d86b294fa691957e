"""Shared utilities for the todotxt command line."""
