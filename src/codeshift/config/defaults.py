"""Starter .codeshift.toml template."""

DEFAULT_TOML = """\
# codeshift configuration
version = "1.0"

[output]
format = "terminal"       # terminal | json
show_summary = true
show_tokens = false       # show token-group boundaries in the terminal table

[plan]
lang = ""                 # default language hint, passed through untouched

[cache]
max_entries = 32

[logging]
level = "warning"         # debug | info | warning | error
"""
