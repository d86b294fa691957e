"""Command implementations for the todotxt CLI."""
