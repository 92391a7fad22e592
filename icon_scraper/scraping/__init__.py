"""
Scraping pipeline for unique item icons.
"""
