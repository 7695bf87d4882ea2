"""
Digital Asset Registry API

A single-authority registry for digital asset records with
ownership-gated mutation and authorization-gated reads.
"""

__version__ = "1.0.0"
