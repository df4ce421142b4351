"""Test suite for pointsboard."""
