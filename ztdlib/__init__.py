"""Goldilocks field arithmetic, Tip5 hashing, nouns with jam/cue, hash-ordered sets and maps, and Cheetah curve points."""

__version__ = "0.1.2"