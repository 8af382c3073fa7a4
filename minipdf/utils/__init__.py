"""Utility helpers for minipdf."""
