"""Pricing app package.

Holds the seasonal catalog (seasons, their date periods, the fallback
nightly price) and the date-partitioned pricing engine built on top of it.
The engine itself lives in ``apps.pricing.domain`` and never touches the
ORM; ``apps.pricing.services`` feeds it from the database.
"""
