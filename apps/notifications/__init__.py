"""Notifications app package.

Sends a booking's contract and invoice to the client by e-mail and keeps a
log of every attempt together with snapshots of the documents' values.
"""
