"""Tests for the word_flashcards package.

TEST INTEGRITY
==============
Do not remove, skip or loosen a failing test without review.

A failing test means either:
- The implementation is wrong (most common - fix the code)
- The test expectations are wrong (discuss before changing)
- The requirements have changed (get approval first)
"""
