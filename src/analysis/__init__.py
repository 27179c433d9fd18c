"""
Analysis modules for ReviewSynth.

- Review stats: rating summaries and CSV export
"""
