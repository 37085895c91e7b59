"""
Smart SAC backend: equipment lifecycle, history and dashboards for the
student activity center.
"""

__version__ = "1.0.0"
