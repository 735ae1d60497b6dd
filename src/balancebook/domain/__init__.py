"""Domain layer for balancebook.

Services live in their own modules (``balancebook.domain.person``,
``balancebook.domain.loan``, ...) and are imported from there.
"""
