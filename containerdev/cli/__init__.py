"""CLI package for containerdev."""
