"""
Analysis Module

Extreme event detection, trend estimation and result assembly over
yearly climate summaries.
"""
