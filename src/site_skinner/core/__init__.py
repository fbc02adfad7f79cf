"""Shared models, protocols and helpers of the skin workflow."""
