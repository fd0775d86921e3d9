"""Media utilities"""
