"""Ladder result reconciliation: divisions, map pool, locks and settlement."""
