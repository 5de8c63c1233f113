"""Rental documents: lease contract and invoice PDFs rendered with ReportLab."""
