#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Internal helpers shared across srclight modules."""
