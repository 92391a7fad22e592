"""
Unique item icon scraper.
"""
