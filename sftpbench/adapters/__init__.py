"""
Adapters layer (CLI, configuration sources)
"""
