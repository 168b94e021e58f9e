"""Core lineup domain: tiers, formations, assignments and diffs."""
