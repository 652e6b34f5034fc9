"""
Day 06: SQL queries over Sailors, Boats and Reserves with Polars

Three queries written two ways:
- Composite string keys as row identifiers
- Polars joins (inner, cross, anti)

Q1 join, Q2 join then filter, Q3 division (anti-join).
"""
