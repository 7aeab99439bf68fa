"""Grouping and ranking of tagged images."""
