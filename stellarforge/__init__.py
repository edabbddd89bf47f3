"""Stellarforge: deterministic procedural generation of celestial bodies."""
