"""
Utility modules for ReviewSynth.

Cross-cutting concerns:
- Storage: File I/O for stored reviews, product catalog and review schedule
"""
