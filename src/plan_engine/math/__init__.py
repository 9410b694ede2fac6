"""Pure calculation helpers: calendar, rounding and training load."""
