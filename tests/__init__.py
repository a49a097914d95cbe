"""Test suite for arcade_chess."""
