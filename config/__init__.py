"""
Configuration Package

Central settings (config/settings.py) and logging setup.
"""
