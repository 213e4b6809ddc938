"""
Triage Backend API.
"""
