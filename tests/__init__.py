"""
Test suite for planegeo-core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
