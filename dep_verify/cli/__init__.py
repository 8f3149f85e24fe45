"""Command line interface for DepVerify."""
