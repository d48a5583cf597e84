"""Learner metrics service package."""
