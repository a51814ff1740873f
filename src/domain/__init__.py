"""Ladder domain logic and shared configuration loading."""
