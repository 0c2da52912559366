"""Personnel Records Package — employees, departments and their effective-dated histories.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
