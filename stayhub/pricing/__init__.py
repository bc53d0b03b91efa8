"""Pricing rules: the rule model, per-night evaluation, and validation."""
