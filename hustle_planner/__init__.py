"""
Hustle Planner - Core Package

Local-first business management for independent entertainers:
clients, appointments, habits, money and follow-up opportunities,
plus rule-based insights and tax estimates over that data.

DESIGN PRINCIPLES:
1. Everything stays on the user's machine
2. Derived totals are computed, never stored independently
3. Corrupt data degrades to an empty result, never a crash
4. Insights are a pure function of the stored records
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Hustle Planner Team"
