"""Bill analysis pipeline."""

from pipeline.bill_pipeline import BillAnalysisPipeline

__all__ = ["BillAnalysisPipeline"]
