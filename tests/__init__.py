"""Tests for the Household Dashboard integration."""
