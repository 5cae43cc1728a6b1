"""
Reporting Module
================

Writes analytics results to CSV and JSON report files. Reports are the
serialization boundary: Decimal amounts are written as exact two-place
strings, dates in ISO format.

Usage:
    from sales_analytics.common import Reporter

    reporter = Reporter(output_dir="outputs/reports")
    reporter.generate_forecast_report(points, "sales_forecast")
    reporter.generate_executive_summary(all_results)
"""

import dataclasses
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from loguru import logger


class Reporter:
    """
    Report generation for analytics results.

    Example:
        >>> reporter = Reporter(output_dir="outputs/reports")
        >>> paths = reporter.generate_restock_report(items, "restock")
        >>> paths['json']
    """

    def __init__(self, output_dir: str = "outputs/reports", timestamped: bool = True):
        """
        Initialize Reporter.

        Args:
            output_dir: Directory for saving reports
            timestamped: Append a generation timestamp to file names
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.timestamped = timestamped
        logger.info(f"Reporter initialized. Output: {self.output_dir}")

    def generate_forecast_report(
        self,
        points: List[Any],
        report_name: str,
        model_info: Optional[Dict[str, Any]] = None,
        backtest: Optional[Dict[str, Any]] = None,
        formats: List[str] = ['csv', 'json']
    ) -> Dict[str, Path]:
        """
        Generate forecast report.

        Args:
            points: ForecastPoint list from SalesForecaster.forecast
            report_name: Base name for report files
            model_info: Forecaster configuration
            backtest: Result of ForecastEvaluator.backtest, if any
            formats: Output formats to generate

        Returns:
            Dictionary of format -> file path
        """
        predicted = [p for p in points if p.predicted]
        payload = {
            'model_info': model_info or {},
            'forecast_summary': {
                'history_days': len(points) - len(predicted),
                'forecast_days': len(predicted),
                'start_date': predicted[0].date if predicted else None,
                'end_date': predicted[-1].date if predicted else None,
                'predicted_total': sum((p.total for p in predicted), Decimal('0.00')),
            },
            'backtest': backtest,
            'points': points,
        }
        return self._write(report_name, payload, rows=points, formats=formats)

    def generate_restock_report(
        self,
        items: List[Any],
        report_name: str,
        formats: List[str] = ['csv', 'json']
    ) -> Dict[str, Path]:
        """Generate restock recommendation report."""
        payload = {
            'flagged_products': len(items),
            'by_urgency': pd.Series([i.urgency.value for i in items], dtype='object').value_counts().to_dict(),
            'items': items,
        }
        return self._write(report_name, payload, rows=items, formats=formats)

    def generate_performance_report(
        self,
        report: Any,
        report_name: str,
        formats: List[str] = ['csv', 'json']
    ) -> Dict[str, Path]:
        """Generate product performance report; the CSV lists every product."""
        return self._write(report_name, report, rows=report.products, formats=formats)

    def generate_seasonality_report(
        self,
        patterns: Any,
        report_name: str,
        formats: List[str] = ['json']
    ) -> Dict[str, Path]:
        """Generate seasonal pattern report."""
        payload = {
            'by_day_of_week': patterns.by_day_of_week,
            'by_hour': patterns.by_hour,
            'by_month': patterns.by_month,
            'recommendations': patterns.recommendations,
            'insights': patterns.recommendations.labels(),
        }
        return self._write(report_name, payload, rows=None, formats=formats)

    def generate_summary_report(
        self,
        sales_summary: Any,
        inventory_summary: Any,
        report_name: str
    ) -> Dict[str, Path]:
        """Generate the sales and inventory overview report."""
        payload = {'sales': sales_summary, 'inventory': inventory_summary}
        return self._write(report_name, payload, rows=None, formats=['json'])

    def generate_executive_summary(
        self,
        all_results: Dict[str, Any],
        report_name: str = "executive_summary"
    ) -> Path:
        """
        Generate executive summary combining all analytics results.

        Args:
            all_results: Results keyed by task name ('forecast', 'restock',
                'performance', 'seasonal', 'summary')
            report_name: Base name for report file

        Returns:
            Path to generated JSON report
        """
        highlights: Dict[str, Any] = {}

        points = all_results.get('forecast')
        if points is not None:
            highlights['predicted_revenue'] = sum(
                (p.total for p in points if p.predicted), Decimal('0.00')
            )

        items = all_results.get('restock')
        if items is not None:
            highlights['urgent_restocks'] = [i.name for i in items if i.urgency.value == 'high']

        performance = all_results.get('performance')
        if performance is not None:
            highlights['period_summary'] = performance.summary
            highlights['best_seller'] = performance.top_selling[0].name if performance.top_selling else None

        patterns = all_results.get('seasonal')
        if patterns is not None:
            highlights['seasonality'] = patterns.recommendations.labels()

        paths = self._write(report_name, {'highlights': highlights}, rows=None, formats=['json'])
        logger.info(f"Generated executive summary: {paths['json']}")
        return paths['json']

    def _write(
        self,
        report_name: str,
        payload: Any,
        rows: Optional[List[Any]],
        formats: List[str]
    ) -> Dict[str, Path]:
        output_paths = {}
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        stem = f"{report_name}_{timestamp}" if self.timestamped else report_name

        # CSV Export
        if 'csv' in formats and rows:
            csv_path = self.output_dir / f"{stem}.csv"
            frame = pd.DataFrame([self._convert_to_serializable(r) for r in rows])
            frame.to_csv(csv_path, index=False)
            output_paths['csv'] = csv_path
            logger.info(f"Saved CSV report: {csv_path}")

        # JSON Export
        if 'json' in formats:
            json_path = self.output_dir / f"{stem}.json"
            json_data = {
                'generated_at': timestamp,
                'report': self._convert_to_serializable(payload),
            }
            with open(json_path, 'w') as f:
                json.dump(json_data, f, indent=2)
            output_paths['json'] = json_path
            logger.info(f"Saved JSON report: {json_path}")

        return output_paths

    def _convert_to_serializable(self, obj: Any) -> Any:
        """Convert result types to JSON serializable values."""
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {
                f.name: self._convert_to_serializable(getattr(obj, f.name))
                for f in dataclasses.fields(obj)
            }
        elif isinstance(obj, dict):
            return {str(self._convert_to_serializable(k)): self._convert_to_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._convert_to_serializable(v) for v in obj]
        elif isinstance(obj, Enum):
            return obj.value
        elif isinstance(obj, Decimal):
            return str(obj)
        elif isinstance(obj, (datetime, date)):
            return obj.isoformat()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif obj is None or isinstance(obj, (str, int, float, bool)):
            return obj
        elif pd.isna(obj):
            return None
        else:
            return str(obj)
