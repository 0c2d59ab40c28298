"""
Data models for hobbytags.
"""
