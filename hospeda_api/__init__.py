"""
Hospeda REST API: entity services with actor-based permission gating.
"""
