"""
revisit - spaced-repetition review tracker for interview practice problems.
"""
