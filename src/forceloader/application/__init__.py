"""Application layer: classification policies, analysis and reporting."""
