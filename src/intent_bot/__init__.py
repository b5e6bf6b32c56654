"""Regex-routed conversational API with fuzzy question matching."""
