"""Plan reporters — Rich terminal table and JSON."""
