"""
Scheduling for ReviewSynth.

Spreads automatically generated reviews across the day.
"""
