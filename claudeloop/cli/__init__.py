"""Command-line flags, their validation, duration parsing and help text."""