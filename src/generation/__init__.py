"""
Review generation components for ReviewSynth.

Contains the stages one generated review passes through:
- Rating Sampler
- Content Composer (with static template pools)
- Review Assembler
"""
