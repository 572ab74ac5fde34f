"""Roster buff sheet: buff matching, level interpolation and damage aggregation."""
