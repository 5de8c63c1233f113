"""Bookings app package.

Stays at the rental (direct, external platform or personal use), their
clients and the option prices derived from them. Two non-cancelled stays
may not share a day, departure day included.
"""
