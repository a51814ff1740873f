"""Ladder persistence helpers."""
