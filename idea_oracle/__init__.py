"""
Idea Oracle - startup idea scoring engine.

Turns a free-text pitch into seven bounded metrics, a composite score,
a founder rank, and a short generated verdict.
"""

__version__ = "1.0.0"
