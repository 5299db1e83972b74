"""Utility helpers for logfocus."""
