"""
RescueLink - HTTP API
"""
