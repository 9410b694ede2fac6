"""Adjustment rules, discovered by the RuleRegistry."""
