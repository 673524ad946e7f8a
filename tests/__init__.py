"""Tests - Test suite for the constraint engine."""
