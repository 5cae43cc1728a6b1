"""
Reports Module
==============

Headline sales figures for reporting periods.
"""

from .sales_summary import PaymentMethodTotals, ReportPeriod, SalesSummarizer, SalesSummary

__all__ = ["PaymentMethodTotals", "ReportPeriod", "SalesSummarizer", "SalesSummary"]
