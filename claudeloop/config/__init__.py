"""Principles configuration: schema, validation, preset defaults and YAML loading."""