"""
RescueLink
Animal rescue reports, NGO triage and notification fan-out.
"""

__version__ = "0.1.0"
