"""Tests - R1CS constraint system test suite."""
