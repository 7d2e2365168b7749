"""
TargetLock - Source Package

A daily-earnings tracker for a piece-rate shoe-cleaning technician.
It records what was worked each day and tells the worker how much must
still be earned today to hit the monthly target.

DESIGN PRINCIPLES:
1. One source of truth: the MonthState
2. Derived numbers are recomputed, never cached
3. Bad data degrades to zero, it never crashes the arithmetic
4. Revenue target and payroll (kasbon, meal) stay separate
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "TargetLock Team"
