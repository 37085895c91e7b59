"""
Service layer.

Services own transactions and turn persistence failures into
application exceptions; repositories below them never commit.
"""
