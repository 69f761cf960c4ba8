"""Principle-conflict detection, decision extraction and council records."""