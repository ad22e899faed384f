"""Tests for :mod:`useraccounts`."""
