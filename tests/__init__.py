"""
Test suite for densestat

Contains:
- tests/unit/          : Unit tests for individual modules
"""
